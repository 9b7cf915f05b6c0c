# zoneboard/models.py
from datetime import datetime, timezone
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import (
    String, Integer, BigInteger, Boolean, DateTime, Numeric, Float, JSON,
    ForeignKey, UniqueConstraint, Index
)

class Base(DeclarativeBase):
    pass

class Athlete(Base):
    __tablename__ = "athletes"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    strava_athlete_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    firstname: Mapped[str | None] = mapped_column(String(200), nullable=True)
    lastname: Mapped[str | None] = mapped_column(String(200), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    # Strava /athlete/zones payload, kept as-is
    hr_zones: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    strava_access_token: Mapped[str | None] = mapped_column(String(512))
    strava_refresh_token: Mapped[str | None] = mapped_column(String(512))
    strava_token_expires_at: Mapped[int | None] = mapped_column(Integer)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    activities: Mapped[list["Activity"]] = relationship(back_populates="athlete")

class Activity(Base):
    __tablename__ = "activities"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    strava_activity_id: Mapped[int] = mapped_column(BigInteger, unique=True)
    athlete_id: Mapped[int] = mapped_column(ForeignKey("athletes.id", ondelete="CASCADE"), index=True)

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sport_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    distance_m: Mapped[float | None] = mapped_column(Float, nullable=True)
    moving_time_s: Mapped[int | None] = mapped_column(Integer, nullable=True)
    average_heartrate: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_heartrate: Mapped[float | None] = mapped_column(Float, nullable=True)
    average_speed_mps: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_elevation_gain_m: Mapped[float | None] = mapped_column(Float, nullable=True)

    zone_points: Mapped[float | None] = mapped_column(Numeric(12, 3), default=0)
    in_competition_window: Mapped[bool] = mapped_column(Boolean, default=False)
    hidden: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    exclude_from_pace_analysis: Mapped[bool] = mapped_column(Boolean, default=False)

    athlete: Mapped[Athlete] = relationship(back_populates="activities")
    heart_rate_zones: Mapped[list["HeartRateZones"]] = relationship(
        back_populates="activity", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_activities_start_date", "start_date"),
        Index("idx_activities_in_competition", "in_competition_window"),
    )

class HeartRateZones(Base):
    __tablename__ = "heart_rate_zones"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    activity_id: Mapped[int] = mapped_column(ForeignKey("activities.id", ondelete="CASCADE"))
    zone_1_time_s: Mapped[int] = mapped_column(Integer, default=0)
    zone_2_time_s: Mapped[int] = mapped_column(Integer, default=0)
    zone_3_time_s: Mapped[int] = mapped_column(Integer, default=0)
    zone_4_time_s: Mapped[int] = mapped_column(Integer, default=0)
    zone_5_time_s: Mapped[int] = mapped_column(Integer, default=0)

    activity: Mapped[Activity] = relationship(back_populates="heart_rate_zones")

    __table_args__ = (
        UniqueConstraint("activity_id", name="uq_hr_zones_activity_id"),
    )

class CompetitionConfig(Base):
    __tablename__ = "competition_config"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
