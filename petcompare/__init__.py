"""Multi-pet health comparison and insight engine.

This package contains the aggregation logic, the rule-based insight and
recommendation generators, and the orchestration service that ties them to
the observation store and ownership checks.
"""
