"""Core configuration, logging, security and wiring."""
