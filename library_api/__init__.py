"""Library catalogue and borrowing lifecycle API."""
