# Services package init
"""
VendorHub Backend — Services Layer
====================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Each service takes its collaborators and configuration in __init__;
       the module-level singletons at the bottom of each file are what the
       routes use.

Service Inventory:
    - PasswordHasher:  bcrypt hashing/verification (security.py)
    - TokenService:    bearer token issue/verify (security.py)
    - FileService:     upload storage under UPLOAD_DIR (file_service.py)
    - VendorService:   register, login, vendor listing with firm resolution
    - FirmService:     firm CRUD and ownership checks
    - ProductService:  product CRUD scoped to owned firms
"""
