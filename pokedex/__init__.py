"""
Pokédex catalogue service.

The package fetches the first-generation creature catalogue from
PokeAPI, keeps it in an in-memory store for the lifetime of the
process and exposes per-type statistics over the whole catalogue and
over the records the user marked as captured.
"""
