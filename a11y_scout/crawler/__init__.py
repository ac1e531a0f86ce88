"""a11y_scout.crawler: frontier, URL policy, analyzer and renderer adapters."""
