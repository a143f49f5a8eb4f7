"""
===============================================================================
TARJETA CRC — interfaces/api/http/schemas/__init__.py
===============================================================================

Responsabilidades:
  - Agrupar DTOs HTTP (camelCase en el wire) por bounded context.

Notas:
  - Importar desde el submódulo concreto (schemas.archives, schemas.auth, ...).
===============================================================================
"""
