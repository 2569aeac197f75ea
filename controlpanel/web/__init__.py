"""Web routes for HTML pages.

Routers are included by ``controlpanel.main.register_routers``; this package
also holds the field renderer and form helpers the templates use.
"""
