"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks every feature uses: DB wiring, settings,
logging, error translation, alert headers and pagination. Keep
feature-specific SQL and business logic in the feature package
(e.g. `cars/`).
"""
