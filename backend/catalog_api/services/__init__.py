"""Service layer: use-case orchestration over units of work and ports.

Import concrete services from their subpackages
(:mod:`catalog_api.services.auth`, :mod:`catalog_api.services.products`).
This package stays import-light because the extension module depends on
:mod:`catalog_api.services._shared.ports`.
"""
