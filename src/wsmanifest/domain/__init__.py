"""Pure domain types: graph nodes, edges, manifests and the error taxonomy."""
