"""Domain models for Scrapdesk.

Contains value objects and domain models that represent the
transaction notification pipeline. These models are immutable and
contain no infrastructure dependencies.
"""
