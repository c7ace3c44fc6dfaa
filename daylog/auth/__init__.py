"""Service for user registration, login and access and refresh tokens."""