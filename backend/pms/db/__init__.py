# Database package: engine/session bootstrap, models and seeding
