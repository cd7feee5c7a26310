"""Scoring module for the survey analytics engine.

Pure, synchronous computation:
  Scale Policy → Response Aggregator (module summary, grouped drivers)
               → Distribution Builder (score histograms)
"""
