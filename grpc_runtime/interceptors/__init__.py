"""Unary interceptors for gateway requests and the chaining rule that composes them."""
