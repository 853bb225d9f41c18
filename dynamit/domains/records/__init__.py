"""Item list domain: paging, filtering and key queries."""
