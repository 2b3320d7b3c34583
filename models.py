from extensions import db
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy import JSON


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


class PortfolioDocument(db.Model):
    """The whole site content, stored as one schema-less document"""
    __tablename__ = 'portfolio_documents'
    id = db.Column(db.String(64), primary_key=True)
    content = db.Column(SafeJSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<PortfolioDocument {self.id}>'


class AdminUser(UserMixin):
    """The single site operator; not persisted"""

    def __init__(self, username):
        self.id = username
        self.username = username

    def __repr__(self):
        return f'<AdminUser {self.username}>'
