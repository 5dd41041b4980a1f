"""
Shared, cross-cutting code for the API.

`core/` holds the schema, the store and the mutation engines every feature
writes through (create/update, link replacement, ordered attachments,
deletes). Keep endpoint-specific reads and request bodies in the feature
packages (e.g. `portfolio/`, `miniatures/`).
"""
