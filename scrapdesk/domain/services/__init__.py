"""Pure domain services: classification, dedup, navigation and the reducer."""
