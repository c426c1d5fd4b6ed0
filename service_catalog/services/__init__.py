"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Contains the service classes that orchestrate business rules and transactions.
Services call repositories for DB operations and translate storage-level
errors into the domain error vocabulary.
"""
