"""Settings for the Marketplace Command Agent."""
