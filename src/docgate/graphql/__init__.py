"""
GraphQL schema, types and resolvers for docgate.
"""
