"""HTTP/GraphQL шлюз."""
