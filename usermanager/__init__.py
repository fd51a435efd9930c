"""User management web application: registration, login, roles and user CRUD."""
