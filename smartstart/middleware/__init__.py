"""Request middleware: logging, timing, auth, rate limits."""
