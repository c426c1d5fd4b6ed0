"""레포지토리 패키지 — 데이터베이스 쿼리 계층.

Repository package — Database query layer.
Contains the repository classes that handle pure database operations.
Each repository extends BaseRepository for generic CRUD and adds domain-specific queries.

Modules:
    base: 제네릭 CRUD 및 저장소 오류 변환 (Generic CRUD and store error translation)
    interfaces: 레포지토리 Protocol 정의 (Repository protocols)
    service_repository: 서비스 (Services, listing, cascading delete)
    version_repository: 버전 (Service-scoped versions)
"""
