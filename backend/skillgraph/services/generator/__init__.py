"""Skill graph synthesis from scraped documentation."""

from skillgraph.services.generator.graph_generator import GraphGenerator

__all__ = ["GraphGenerator"]
