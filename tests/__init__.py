"""
Tests package - Test suite for kutator.

Contains:
- unit/: Unit tests for individual components and the review engine
- fixtures/: Sample admission payloads and test mutators
"""
