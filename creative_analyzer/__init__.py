"""Meta Ads creative analysis and performance reconciliation."""
