"""
Concrete data-source adapters (local files, HTTP).

Important: keep this package import side-effect free.
Do not import adapter modules here.
"""
__all__: list[str] = []
