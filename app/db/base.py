# /app/db/base.py

# Central registry for the SQLAlchemy models. Importing them here guarantees
# that Base.metadata knows every table before create_all runs.

from .base_class import Base

from .models.lab_models import User, Group, GroupMember
