"""Insight Miner - automatic dashboards for newly created datasets"""

__version__ = "1.0.0"
