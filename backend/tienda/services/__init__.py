"""
Tienda API: Services Layer
==========================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - validators:     Entity Validators (payload → normalized record)
    - repository:     EntityRepository (parameterized SELECT / INSERT)
    - catalog:        CatalogService (tables and columns of the store)
    - store_service:  StoreService (validate → insert; list reads)

Services never see a Request; they receive the AsyncSession for the call.
"""
