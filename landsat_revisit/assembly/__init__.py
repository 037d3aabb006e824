"""Response assembly for the lookup and today endpoints."""
