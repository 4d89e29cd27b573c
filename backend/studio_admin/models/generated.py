from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class StudioSettings(Base):
    __tablename__ = 'studio_settings'
    __table_args__ = (
        # NULL effective_from is one timeline slot per key. SQLite enforces
        # this through the expression index in migrations/001.
        UniqueConstraint('setting_key', 'effective_from', postgresql_nulls_not_distinct=True),
    )

    id = Column(Integer, primary_key=True)
    setting_key = Column(Text, nullable=False, index=True)
    setting_value = Column(Text, nullable=False, server_default=text("'{}'"))
    effective_from = Column(Text)  # YYYY-MM-DD, NULL = effective immediately
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    created_by = Column(Text)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))


class Machines(Base):
    __tablename__ = 'machines'

    id = Column(Integer, primary_key=True)
    machine_number = Column(Integer, nullable=False, unique=True)
    name = Column(Text)
    is_available = Column(Integer, nullable=False, server_default=text('1'))

    training_sessions = relationship('TrainingSessions', back_populates='machine')


class Members(Base):
    __tablename__ = 'members'

    id = Column(Integer, primary_key=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text)

    session_links = relationship('TrainingSessionMembers', back_populates='member')


class TrainingSessions(Base):
    __tablename__ = 'training_sessions'

    id = Column(Integer, primary_key=True)
    machine_id = Column(ForeignKey('machines.id', ondelete='SET NULL'))
    # UTC instants, fixed-width "YYYY-MM-DDTHH:MM:SS+00:00" so text order is time order
    scheduled_start = Column(Text, nullable=False, index=True)
    scheduled_end = Column(Text, nullable=False)
    status = Column(Text, nullable=False, server_default=text("'scheduled'"))
    notes = Column(Text)
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))

    machine = relationship('Machines', back_populates='training_sessions')
    member_links = relationship('TrainingSessionMembers', back_populates='session')


class TrainingSessionMembers(Base):
    __tablename__ = 'training_session_members'
    __table_args__ = (
        UniqueConstraint('session_id', 'member_id'),
    )

    id = Column(Integer, primary_key=True)
    session_id = Column(ForeignKey('training_sessions.id', ondelete='CASCADE'), nullable=False)
    member_id = Column(ForeignKey('members.id', ondelete='SET NULL'))

    session = relationship('TrainingSessions', back_populates='member_links')
    member = relationship('Members', back_populates='session_links')
