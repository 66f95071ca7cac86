"""Infrastructure: persistence, security and service implementations."""
