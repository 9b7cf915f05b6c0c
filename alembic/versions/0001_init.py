from alembic import op
import sqlalchemy as sa

revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('athletes',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('strava_athlete_id', sa.BigInteger, nullable=False, unique=True),
        sa.Column('firstname', sa.String(200)),
        sa.Column('lastname', sa.String(200)),
        sa.Column('profile_image_url', sa.String(1024)),
        sa.Column('hr_zones', sa.JSON),
        sa.Column('strava_access_token', sa.String(512)),
        sa.Column('strava_refresh_token', sa.String(512)),
        sa.Column('strava_token_expires_at', sa.Integer),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table('competition_config',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default='true'),
    )

    op.create_table('activities',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('strava_activity_id', sa.BigInteger, nullable=False, unique=True),
        sa.Column('athlete_id', sa.Integer, sa.ForeignKey('athletes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255)),
        sa.Column('sport_type', sa.String(64)),
        sa.Column('start_date', sa.DateTime(timezone=True)),
        sa.Column('distance_m', sa.Float),
        sa.Column('moving_time_s', sa.Integer),
        sa.Column('average_heartrate', sa.Float),
        sa.Column('max_heartrate', sa.Float),
        sa.Column('average_speed_mps', sa.Float),
        sa.Column('total_elevation_gain_m', sa.Float),
        sa.Column('zone_points', sa.Numeric(12, 3), server_default='0'),
        sa.Column('in_competition_window', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('hidden', sa.Boolean),
        sa.Column('exclude_from_pace_analysis', sa.Boolean, nullable=False, server_default='false'),
    )
    op.create_index('ix_activities_athlete_id', 'activities', ['athlete_id'])
    op.create_index('idx_activities_start_date', 'activities', ['start_date'])
    op.create_index('idx_activities_in_competition', 'activities', ['in_competition_window'])

    op.create_table('heart_rate_zones',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('activity_id', sa.Integer, sa.ForeignKey('activities.id', ondelete='CASCADE'), nullable=False),
        sa.Column('zone_1_time_s', sa.Integer, nullable=False, server_default='0'),
        sa.Column('zone_2_time_s', sa.Integer, nullable=False, server_default='0'),
        sa.Column('zone_3_time_s', sa.Integer, nullable=False, server_default='0'),
        sa.Column('zone_4_time_s', sa.Integer, nullable=False, server_default='0'),
        sa.Column('zone_5_time_s', sa.Integer, nullable=False, server_default='0'),
        sa.UniqueConstraint('activity_id', name='uq_hr_zones_activity_id')
    )

def downgrade():
    op.drop_table('heart_rate_zones')
    op.drop_index('idx_activities_in_competition', table_name='activities')
    op.drop_index('idx_activities_start_date', table_name='activities')
    op.drop_index('ix_activities_athlete_id', table_name='activities')
    op.drop_table('activities')
    op.drop_table('competition_config')
    op.drop_table('athletes')
