"""
Infrastructure layer for the legal practice CRM.

This layer contains the implementation details for external systems integration:
- Snapshot persistence (JSON files on disk, in-memory for tests)
- Mappers between domain entities and the stored camelCase records
- OpenAI case analysis
- ViaCEP postal code lookup

The infrastructure layer implements interfaces defined in the domain layer.
"""
