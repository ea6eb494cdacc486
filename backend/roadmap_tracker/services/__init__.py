"""Domain services: grouping, stats, migration and storage coordination."""
