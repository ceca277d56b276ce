# Database package: declarative models, lazy engine/session and seeding
