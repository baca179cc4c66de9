"""
Errores del motor de registro.

Cada error lleva un ``reason`` legible y un ``kind`` estable que la capa HTTP
traduce a un código de estado. Todas las validaciones se ejecutan antes de
mutar el estado, de modo que un error implica que no hubo escritura.
"""


class LedgerError(Exception):
    """Error base del ledger"""

    kind = "ledger"
    status_code = 400

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AccessControlError(LedgerError):
    """El llamador no tiene la capacidad requerida"""

    kind = "access_control"
    status_code = 403


class LedgerValidationError(LedgerError):
    """Entrada vacía, malformada o fuera de límites"""

    kind = "validation"
    status_code = 400


class OutOfRangeError(LedgerValidationError):
    kind = "out_of_range"


class ConflictError(LedgerValidationError):
    """La clave de la entidad ya existe"""

    kind = "conflict"
    status_code = 409


class NotFoundError(LedgerError):
    kind = "not_found"
    status_code = 404
