"""HTTP application for the Bookshelf API."""
