"""Player and team management for a family pickleball league."""
