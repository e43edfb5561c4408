"""Jenkins tool adapter: catalog, argument models, handlers and router."""
