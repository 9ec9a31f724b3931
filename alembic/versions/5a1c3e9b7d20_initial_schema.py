"""initial schema: classes, modules, enseignants, etudiants, seances, absences, justifications, users

Revision ID: 5a1c3e9b7d20
Revises:
Create Date: 2026-10-19 10:12:04.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5a1c3e9b7d20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'classes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nom_classe', sa.String(), nullable=False),
        sa.Column('niveau', sa.String(), nullable=False),
        sa.Column('departement', sa.String(), nullable=False),
        sa.Column('filiere', sa.String(), nullable=False),
    )
    op.create_index('ix_classes_id', 'classes', ['id'])

    op.create_table(
        'modules',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nom_module', sa.String(), nullable=False),
        sa.Column('coefficient', sa.Integer(), nullable=False),
        sa.CheckConstraint('coefficient >= 1', name='ck_module_coefficient'),
    )
    op.create_index('ix_modules_id', 'modules', ['id'])

    op.create_table(
        'enseignants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nom', sa.String(), nullable=False),
        sa.Column('prenom', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('telephone', sa.String(), nullable=False),
    )
    op.create_index('ix_enseignants_id', 'enseignants', ['id'])
    op.create_index('ix_enseignants_email', 'enseignants', ['email'], unique=True)

    op.create_table(
        'enseignant_classes',
        sa.Column('enseignant_id', sa.Integer(), sa.ForeignKey('enseignants.id'), primary_key=True),
        sa.Column('classe_id', sa.Integer(), sa.ForeignKey('classes.id'), primary_key=True),
    )

    op.create_table(
        'etudiants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nom', sa.String(), nullable=False),
        sa.Column('prenom', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('classe_id', sa.Integer(), sa.ForeignKey('classes.id'), nullable=True),
        sa.Column('is_activated', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_etudiants_id', 'etudiants', ['id'])
    op.create_index('ix_etudiants_email', 'etudiants', ['email'], unique=True)

    op.create_table(
        'seances',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('date_seance', sa.Date(), nullable=False),
        sa.Column('heure_debut', sa.String(), nullable=False),
        sa.Column('heure_fin', sa.String(), nullable=False),
        sa.Column('enseignant_id', sa.Integer(), sa.ForeignKey('enseignants.id'), nullable=False),
        sa.Column('module_id', sa.Integer(), sa.ForeignKey('modules.id'), nullable=False),
        sa.Column('classe_id', sa.Integer(), sa.ForeignKey('classes.id'), nullable=False),
    )
    op.create_index('ix_seances_id', 'seances', ['id'])
    op.create_index('ix_seances_enseignant_id', 'seances', ['enseignant_id'])
    op.create_index('ix_seances_classe_id', 'seances', ['classe_id'])

    op.create_table(
        'absences',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('etudiant_id', sa.Integer(), sa.ForeignKey('etudiants.id'), nullable=False),
        sa.Column('seance_id', sa.Integer(), sa.ForeignKey('seances.id'), nullable=False),
        sa.Column(
            'statut',
            sa.Enum('absent', 'present', 'retard', name='statut_absence'),
            nullable=False,
        ),
        sa.Column('motif', sa.Text(), nullable=True),
        sa.Column('date_justification', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_absences_id', 'absences', ['id'])
    op.create_index('ix_absences_etudiant_id', 'absences', ['etudiant_id'])
    op.create_index('ix_absences_seance_id', 'absences', ['seance_id'])

    op.create_table(
        'justifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('absence_id', sa.Integer(), sa.ForeignKey('absences.id'), nullable=False),
        sa.Column('fichier', sa.String(), nullable=False),
        sa.Column('commentaire', sa.Text(), nullable=True),
        sa.Column(
            'etat',
            sa.Enum('en attente', 'validé', 'refusé', name='etat_justification'),
            nullable=False,
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_justifications_id', 'justifications', ['id'])
    op.create_index('ix_justifications_absence_id', 'justifications', ['absence_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('nom', sa.String(), nullable=False),
        sa.Column('prenom', sa.String(), nullable=False),
        sa.Column('role', sa.Enum('student', 'admin', 'professor', name='user_role'), nullable=False),
        sa.Column('etudiant_id', sa.Integer(), sa.ForeignKey('etudiants.id'), nullable=True, unique=True),
        sa.Column('enseignant_id', sa.Integer(), sa.ForeignKey('enseignants.id'), nullable=True, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)


def downgrade() -> None:
    op.drop_table('users')
    op.drop_table('justifications')
    op.drop_table('absences')
    op.drop_table('seances')
    op.drop_table('etudiants')
    op.drop_table('enseignant_classes')
    op.drop_table('enseignants')
    op.drop_table('modules')
    op.drop_table('classes')
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='etat_justification').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='statut_absence').drop(op.get_bind(), checkfirst=True)
