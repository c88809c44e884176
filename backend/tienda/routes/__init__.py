"""
Tienda API: Routes Package
==========================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:      GET  /                          (liveness banner)
                      GET  /health                    (store connectivity)
    - products.py:    GET  /api/productos, POST /api/productos
    - clients.py:     GET  /api/clientes,  POST /api/clientes
    - orders.py:      GET  /api/ordenes,   POST /api/ordenes
    - categories.py:  GET  /api/categorias
    - catalog.py:     GET  /api/check-tables
                      GET  /api/check-columns/{table}

Design Principle:
    Routes are THIN: they pull the body and session out of the request,
    call a service, and return. Errors propagate to the global exception
    handlers in main.py.
"""
