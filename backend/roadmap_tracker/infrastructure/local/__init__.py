"""Local (single machine) storage backends."""
