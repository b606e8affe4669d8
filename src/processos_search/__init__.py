"""Search, list and inspect legal processes served by the lawsuits API."""
