#!/usr/bin/env python3
import os
import sys

# Agregar el directorio backend al path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from sqlalchemy import inspect, select, func
from api.config import settings
from api.auth.jwt_service import jwt_service
from api.services.ledger import bootstrap_registry, get_contract_info
from database.models.database import (
    Base, engine, SessionLocal, create_tables,
    Farm, Category, Product, FarmingProcess, Medicine, Fertilizer,
    Harvest, Distribution, RoleMember, LedgerEvent
)


class DatabaseManager:
    def __init__(self):
        self.engine = engine
        self.SessionLocal = SessionLocal

    def verify_tables(self):
        inspector = inspect(self.engine)
        existing_tables = inspector.get_table_names()
        expected_tables = list(Base.metadata.tables)
        return all(table in existing_tables for table in expected_tables)

    def init_registry(self, owner=None):
        create_tables()
        db = self.SessionLocal()
        try:
            state = bootstrap_registry(db, owner or settings.registry_owner)
            print(f"Registro inicializado (owner: {state.owner}, admin: {state.admin})")
        finally:
            db.close()

    def show_data_summary(self):
        db = self.SessionLocal()
        try:
            info = get_contract_info(db)
            print(f"{info.name} v{info.version} - owner: {info.owner}")

            for model in (
                Farm, Category, Product, FarmingProcess, Medicine,
                Fertilizer, Harvest, Distribution, RoleMember, LedgerEvent
            ):
                count = db.scalar(select(func.count()).select_from(model))
                print(f"{model.__tablename__}: {count}")
        finally:
            db.close()


def main():
    import argparse
    parser = argparse.ArgumentParser(description='Gestión del Registro de Trazabilidad')
    subparsers = parser.add_subparsers(dest='command', required=True)

    init_parser = subparsers.add_parser('init', help='Crear tablas e inicializar el registro')
    init_parser.add_argument('--owner', default=None)

    subparsers.add_parser('verify', help='Verificar que existen todas las tablas')
    subparsers.add_parser('summary', help='Mostrar conteos por tabla')

    token_parser = subparsers.add_parser('token', help='Emitir un token de acceso')
    token_parser.add_argument('identity')

    args = parser.parse_args()

    db = DatabaseManager()

    if args.command == 'init':
        db.init_registry(args.owner)
    elif args.command == 'verify':
        if db.verify_tables():
            print("Todas las tablas existen")
            db.show_data_summary()
        else:
            print("Faltan tablas")
    elif args.command == 'summary':
        db.show_data_summary()
    elif args.command == 'token':
        print(jwt_service.create_access_token(args.identity))


if __name__ == "__main__":
    main()
