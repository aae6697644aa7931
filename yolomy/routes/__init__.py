# Routes package init
"""
Yolomy Products Backend — API Routes Package
=============================================

Route Inventory:
    - products.py: GET    /api/products            (list all products)
                   POST   /api/products            (add a product)
                   DELETE /api/products/{id}       (delete a product)
                   GET    /api/products/{id}/image (download a product image)
    - health.py:   GET    /health                  (service health check)

Routes stay thin: extract the input, call the repository once, shape the
response. Errors are raised, not returned; main.py formats them.
"""
