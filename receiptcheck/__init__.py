"""End-to-end checks for downloadable PDF receipts."""
