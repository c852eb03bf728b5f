"""Demo walkthrough for secure_qr."""
