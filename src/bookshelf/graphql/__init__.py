"""GraphQL gateway: schema, types and resolvers."""
