"""HTTP primitives: headers, request, response, and entity tags."""
