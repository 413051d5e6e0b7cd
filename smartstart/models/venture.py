"""
Venture domain model.

A venture belongs to exactly one user and moves through a fixed lifecycle:
discovery → development → launch.
"""

from smartstart.models import db, isoformat, utcnow

VENTURE_STAGES = ("discovery", "development", "launch")


class Venture(db.Model):
    __tablename__ = "ventures"
    __table_args__ = (
        db.Index("idx_ventures_user", "userId"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        "userId", db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    stage = db.Column(db.String(20), nullable=False, default="discovery")
    status = db.Column(db.String(20), nullable=False, default="active")
    progress = db.Column(db.Integer, nullable=False, default=0)
    valuation = db.Column(db.Float, nullable=True)
    industry = db.Column(db.String(100), nullable=True)
    is_public = db.Column("isPublic", db.Boolean, nullable=False, default=False)
    created_at = db.Column("createdAt", db.DateTime, default=utcnow)
    updated_at = db.Column("updatedAt", db.DateTime, default=utcnow, onupdate=utcnow)

    owner = db.relationship("User", back_populates="ventures")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "description": self.description,
            "stage": self.stage,
            "status": self.status,
            "progress": self.progress,
            "valuation": self.valuation,
            "industry": self.industry,
            "isPublic": self.is_public,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Venture {self.id}: {self.name} [{self.stage}]>"
