from datetime import datetime, timezone

from reaction_game import db


def _utcnow():
    return datetime.now(timezone.utc)


class KeyValue(db.Model):
    """Single string record addressed by a fixed key, like browser local storage."""
    __tablename__ = 'key_value'
    key = db.Column(db.String(128), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def to_dict(self):
        return {
            'key': self.key,
            'value': self.value,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def get_value(cls, key):
        row = db.session.get(cls, key)
        return row.value if row else None

    @classmethod
    def set_value(cls, key, value):
        row = db.session.get(cls, key)
        if row is None:
            row = cls(key=key, value=value)
        else:
            row.value = value
        db.session.add(row)
        db.session.commit()

    @classmethod
    def remove(cls, key):
        row = db.session.get(cls, key)
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        return True
