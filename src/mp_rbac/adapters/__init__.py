"""Adapters – storage backends for the registry persistence port."""
