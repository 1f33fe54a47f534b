"""Kinderloop marketplace: listings, moderation, cart, checkout and support."""
