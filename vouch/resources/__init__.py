"""Package data: default message bundle."""
