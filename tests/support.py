from __future__ import annotations

import unittest

from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from printshop.auth import get_current_user
from printshop.database import Base, get_db
from printshop.main import app
from printshop.models import Company, Office, Role, User
from printshop.seed import seed_roles_and_permissions
from printshop.statuses import RoleName


class DatabaseTestCase(unittest.TestCase):
    """Fresh in-memory database with roles and permissions seeded"""

    def setUp(self) -> None:
        self.engine = create_engine(
            'sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool
        )
        Base.metadata.create_all(bind=self.engine)
        self.Session = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.db: Session = self.Session()
        seed_roles_and_permissions(self.db)

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()

    def make_user(self, email: str = 'admin@example.com', roles=(RoleName.ADMIN,)) -> User:
        user = User(email=email, name=email.split('@')[0], firebase_uid=f'uid-{email}')
        user.roles = self.db.query(Role).filter(Role.name.in_([r.value for r in roles])).all()
        self.db.add(user)
        self.db.commit()
        return user

    def make_office(self, name: str = 'Main Office', company_name: str = 'Acme Printing', **kwargs) -> Office:
        company = Company(name=company_name)
        office = Office(name=name, company=company, **kwargs)
        self.db.add(office)
        self.db.commit()
        return office


class APITestCase(DatabaseTestCase):
    """Runs requests through the app against the test database as `self.user`"""

    user_roles = (RoleName.ADMIN,)

    def setUp(self) -> None:
        super().setUp()
        self.user = self.make_user(roles=self.user_roles)
        self.user_id = self.user.id

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        def override_current_user(db: Session = Depends(get_db)) -> User:
            return db.get(User, self.user_id)

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_current_user] = override_current_user
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def refresh(self) -> None:
        self.db.expire_all()
