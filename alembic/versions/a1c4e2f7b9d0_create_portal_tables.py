"""Create professor, class, student, grade and calendar event tables

Revision ID: a1c4e2f7b9d0
Revises:
Create Date: 2025-08-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c4e2f7b9d0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the portal schema."""
    op.create_table(
        'professors',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('department', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_professors_id'), 'professors', ['id'], unique=False)
    op.create_index(op.f('ix_professors_email'), 'professors', ['email'], unique=True)

    op.create_table(
        'students',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('student_number', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone_number', sa.String(), nullable=True),
        sa.Column('major', sa.String(), nullable=True),
        sa.Column('academic_year', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_students_id'), 'students', ['id'], unique=False)
    op.create_index(op.f('ix_students_student_number'), 'students', ['student_number'], unique=True)
    op.create_index(op.f('ix_students_first_name'), 'students', ['first_name'], unique=False)
    op.create_index(op.f('ix_students_last_name'), 'students', ['last_name'], unique=False)

    op.create_table(
        'classes',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('class_name', sa.String(), nullable=False),
        sa.Column('course_code', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('semester', sa.String(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('credits', sa.Integer(), nullable=False),
        sa.Column('schedule', sa.JSON(), nullable=False),
        sa.Column('enrolled_students', sa.JSON(), nullable=False),
        sa.Column('max_enrollment', sa.Integer(), nullable=False),
        sa.Column('syllabus', sa.JSON(), nullable=True),
        sa.Column('announcements', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('professor_id', sa.String(), nullable=False),
        sa.ForeignKeyConstraint(['professor_id'], ['professors.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('professor_id', 'course_code', 'semester', 'year', name='uq_class_course_term'),
    )
    op.create_index(op.f('ix_classes_id'), 'classes', ['id'], unique=False)
    op.create_index(op.f('ix_classes_class_name'), 'classes', ['class_name'], unique=False)
    op.create_index(op.f('ix_classes_course_code'), 'classes', ['course_code'], unique=False)
    op.create_index(op.f('ix_classes_professor_id'), 'classes', ['professor_id'], unique=False)

    op.create_table(
        'grades',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('assignment_name', sa.String(), nullable=False),
        sa.Column('assignment_type', sa.String(), nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=True),
        sa.Column('max_points', sa.Float(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('points', sa.Float(), nullable=False),
        sa.Column('percentage', sa.Float(), nullable=True),
        sa.Column('letter_grade', sa.String(), nullable=True),
        sa.Column('feedback', sa.JSON(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=True),
        sa.Column('is_late', sa.Boolean(), nullable=False),
        sa.Column('late_penalty', sa.Float(), nullable=False),
        sa.Column('rubric', sa.JSON(), nullable=False),
        sa.Column('is_excused', sa.Boolean(), nullable=False),
        sa.Column('is_extra', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('student_id', sa.String(), nullable=False),
        sa.Column('class_id', sa.String(), nullable=False),
        sa.Column('professor_id', sa.String(), nullable=False),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id']),
        sa.ForeignKeyConstraint(['professor_id'], ['professors.id']),
        sa.ForeignKeyConstraint(['student_id'], ['students.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'class_id', 'assignment_name', name='uq_grade_assignment'),
    )
    op.create_index(op.f('ix_grades_id'), 'grades', ['id'], unique=False)
    op.create_index(op.f('ix_grades_assignment_type'), 'grades', ['assignment_type'], unique=False)
    op.create_index(op.f('ix_grades_student_id'), 'grades', ['student_id'], unique=False)
    op.create_index(op.f('ix_grades_class_id'), 'grades', ['class_id'], unique=False)
    op.create_index(op.f('ix_grades_professor_id'), 'grades', ['professor_id'], unique=False)

    op.create_table(
        'calendar_events',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('event_type', sa.String(), nullable=False),
        sa.Column('start_date_time', sa.DateTime(), nullable=False),
        sa.Column('end_date_time', sa.DateTime(), nullable=False),
        sa.Column('is_all_day', sa.Boolean(), nullable=False),
        sa.Column('location', sa.JSON(), nullable=True),
        sa.Column('recurrence', sa.JSON(), nullable=True),
        sa.Column('attendees', sa.JSON(), nullable=False),
        sa.Column('priority', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('color', sa.String(), nullable=False),
        sa.Column('reminders', sa.JSON(), nullable=False),
        sa.Column('attachments', sa.JSON(), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('is_visible', sa.Boolean(), nullable=False),
        sa.Column('is_external', sa.Boolean(), nullable=False),
        sa.Column('external_id', sa.String(), nullable=True),
        sa.Column('version_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('professor_id', sa.String(), nullable=False),
        sa.Column('class_id', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['class_id'], ['classes.id']),
        sa.ForeignKeyConstraint(['professor_id'], ['professors.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_calendar_events_id'), 'calendar_events', ['id'], unique=False)
    op.create_index(op.f('ix_calendar_events_event_type'), 'calendar_events', ['event_type'], unique=False)
    op.create_index(op.f('ix_calendar_events_start_date_time'), 'calendar_events', ['start_date_time'], unique=False)
    op.create_index(op.f('ix_calendar_events_status'), 'calendar_events', ['status'], unique=False)
    op.create_index(op.f('ix_calendar_events_external_id'), 'calendar_events', ['external_id'], unique=False)
    op.create_index(op.f('ix_calendar_events_professor_id'), 'calendar_events', ['professor_id'], unique=False)
    op.create_index(op.f('ix_calendar_events_class_id'), 'calendar_events', ['class_id'], unique=False)


def downgrade() -> None:
    """Drop the portal schema."""
    op.drop_table('calendar_events')
    op.drop_table('grades')
    op.drop_table('classes')
    op.drop_table('students')
    op.drop_table('professors')
