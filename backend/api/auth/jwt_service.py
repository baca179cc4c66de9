from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from api.config import settings


class JWTService:
    """Servicio para emitir y verificar tokens JWT de identidad del llamador"""

    @staticmethod
    def create_access_token(
        identity: str, expires_delta: Optional[timedelta] = None
    ) -> str:
        """Emitir token cuyo ``sub`` es la identidad del llamador"""
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
        )
        payload = {"sub": identity, "exp": expire}
        return jwt.encode(
            payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
        )

    @staticmethod
    def verify_token(token: str) -> Optional[dict]:
        """Verificar y decodificar token JWT"""
        try:
            return jwt.decode(
                token,
                settings.jwt_secret_key,
                algorithms=[settings.jwt_algorithm],
                options={"verify_aud": False},
            )
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None


jwt_service = JWTService()
