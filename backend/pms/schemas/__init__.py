# Schemas package: request/response DTOs for the HTTP layer
