"""Resolver package for the GraphQL schema.

Resolvers read the document store from ``info.context["store"]`` and convert
stored documents into GraphQL types.
"""
