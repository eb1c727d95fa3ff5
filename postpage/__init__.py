"""Server-rendered blog post page backed by a GraphQL content API."""
