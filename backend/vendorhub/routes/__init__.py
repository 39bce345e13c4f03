# Routes package init
"""
VendorHub Backend — API Routes Package
========================================

Route Inventory:
    - vendors.py:   /vendor/register, /vendor/login, /vendor/all-vendors,
                    /vendor/single-vendor/{id}
    - firms.py:     /firm/add-firm, /firm/all-firms, /firm/single-firm/{id},
                    DELETE /firm/{id}
    - products.py:  /product/add-product/{firmId}, /product/{firmId}/products,
                    DELETE /product/{id}
    - uploads.py:   GET /uploads/{path}
    - health.py:    GET /health

Routes stay thin: pull data out of the request, call a service, pick the
status code. Errors are raised as VendorHubError subclasses and rendered by
the handlers registered in main.py.
"""
