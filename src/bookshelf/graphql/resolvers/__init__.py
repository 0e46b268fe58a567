"""Resolver package for GraphQL schema.

Each root field in ``queries/root.py`` and ``mutations/root.py`` delegates to
one function here. Resolvers read the store and auth service from the GraphQL
context built in ``schema.create_graphql_router``.
"""
