"""
Application package initializer.

The console is organised in layers.  Services wrap the marketplace
backend endpoints, controllers hold the state of each admin screen
(lists, details, forms, bulk upload) and the versioned routers under
``api/v1`` expose that state over HTTP.  The application object is
created in ``main``.
"""
