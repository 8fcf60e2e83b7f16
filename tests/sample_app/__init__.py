"""Sample SQLAlchemy application reflected by the generator tests."""
