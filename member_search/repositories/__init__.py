"""레포지토리 패키지: 데이터베이스 쿼리 계층.

Repository package: Database query layer.
Contains the predicate fragments, the condition composers and the
repositories that issue queries against an AsyncSession.
"""
