"""
Explicit entity <-> DTO / command mapping.

Each business module exposes `to_dto`, `to_list_dto`, `to_details_dto`,
`from_create` and `apply_update`; line-item modules prefix theirs with `line_`.
Lookups share `LookupMapping`.
"""
