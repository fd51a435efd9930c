"""Test package. Configures an in-memory database before the application is imported."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-for-unit-tests"
os.environ["JWT_EXPIRATION"] = "3600"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["STATIC_DIR"] = "tests/_no_static_dir"
os.environ["SEED_DEFAULT_USERS"] = "true"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_DEFAULT_PASSWORD"] = "Admin_Pass_1"
os.environ["TEST_USERNAME"] = "user"
os.environ["TEST_EMAIL"] = "user@example.com"
os.environ["USER_DEFAULT_PASSWORD"] = "User_Pass_1"
