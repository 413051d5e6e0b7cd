"""
Auth Models — user accounts.

The password column holds a bcrypt hash and is never serialised.
"""

from smartstart.models import db, isoformat, utcnow

USER_ROLES = ("founder", "admin", "user")


class User(db.Model):
    __tablename__ = "users"
    __table_args__ = (
        db.CheckConstraint(
            "role IN (" + ", ".join(f"'{r}'" for r in USER_ROLES) + ")",
            name="ck_users_role",
        ),
    )

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(200), unique=True, nullable=False)
    password_hash = db.Column("password", db.String(256), nullable=False)
    first_name = db.Column("firstName", db.String(100), nullable=False)
    last_name = db.Column("lastName", db.String(100), nullable=False)
    role = db.Column(db.String(20), nullable=False, default="founder")
    is_active = db.Column("isActive", db.Boolean, nullable=False, default=True)
    email_verified = db.Column("emailVerified", db.Boolean, nullable=False, default=False)
    created_at = db.Column("createdAt", db.DateTime, default=utcnow)
    updated_at = db.Column("updatedAt", db.DateTime, default=utcnow, onupdate=utcnow)

    ventures = db.relationship("Venture", back_populates="owner", lazy="dynamic")

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role,
            "isActive": self.is_active,
            "emailVerified": self.email_verified,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def token_claims(self):
        """Identity claims embedded in every issued token."""
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }

    def __repr__(self):
        return f"<User {self.id}: {self.email}>"
