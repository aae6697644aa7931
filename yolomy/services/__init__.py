# Services package init
"""
Yolomy Products Backend — Services Layer
=========================================

Service Inventory:
    - ProductRepository: list/create/get/delete over the `products` collection
    - ImageService: reads and size-checks the uploaded `image` form field
"""
