"""Top-level package for the NeTEx period-ticket convertor.

This package turns period-ticket submissions (zone-based and
multi-service bus passes) into NeTEx fare documents, validates them
against the published XML Schema and hands them back to the submitter.

- netex: the template-driven document generator
- io: decoding of storage events, ticket JSON and operator records
- services: the generation and validation stages
- adapters / ports: storage, reference data, validation and email
"""
