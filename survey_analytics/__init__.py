"""Survey response aggregation engine.

Turns raw scaled answers (Likert 1-5, NPS-style 0-10) into positive-response
percentages, grouped driver breakdowns and score distributions, and keeps the
displayed module percentage reconciled with periodically polled server
analytics.
"""
