from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Note: Models are registered in app/db/models/__init__.py
# All models must import Base from this module
