# Services package init
"""
Homebase Backend: Services Layer
================================

Service Inventory:
    - OwnedResourceService: statements shared by every user-owned table
      (owner-scoped list / get, owner-filtered UPDATE / DELETE, 403 vs 404)
    - PropertyService: property validation, street-view image, financial updates
    - MovieService: movie validation (required fields, 1-5 rating)

Services receive the request's AsyncSession on every call and hold no state,
so a single module-level instance of each is shared by all requests.
"""
