#!/usr/bin/env python3

import dataclasses

import pytest

from openapi_to_code import ContextConfig, generate_context
from openapi_to_code.context import SchemaKind
from openapi_to_code.errors import CircularRefDependencyError, ResolveRefError, UnexpectedError


class TestGenerateContext:
    """Test the generation context built from a full document"""

    def test_export_map(self, petstore):
        context = generate_context(petstore)
        assert dict(context.exported_component_schemas_map) == {
            "Pet": "Pet",
            "pet-status": "pet_status",
            "PetList": "PetList",
            "Animal": "Pet",
            "Creature": "Pet",
            "Error": "Error",
            "PetOrError": "PetOrError",
        }

    def test_export_map_keeps_document_order(self, petstore):
        context = generate_context(petstore)
        assert list(context.exported_component_schemas_map) == [
            "Pet",
            "pet-status",
            "PetList",
            "Animal",
            "Creature",
            "Error",
            "PetOrError",
        ]

    def test_component_schema_kinds(self, petstore):
        context = generate_context(petstore)
        assert context.component_schema_kinds["PetId"] == SchemaKind.PRIMITIVE
        assert context.component_schema_kinds["Identifier"] == SchemaKind.REF
        assert context.component_schema_kinds["PetList"] == SchemaKind.ARRAY

    def test_bundle_exposes_document_and_resolvers(self, petstore):
        context = generate_context(petstore)
        assert context.document is petstore
        pet = petstore["components"]["schemas"]["Pet"]
        assert context.resolve_ref("#/components/schemas/Pet") is pet
        assert context.resolve_object({"$ref": "#/components/schemas/Creature"}) is pet

    def test_resolvers_share_one_cache(self, petstore):
        context = generate_context(petstore)
        first = context.resolve_object({"$ref": "#/components/schemas/Animal"})
        second = context.resolve_object({"$ref": "#/components/schemas/Pet"})
        assert first is second

    def test_context_is_frozen(self, petstore):
        context = generate_context(petstore)
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.document = {}
        with pytest.raises(TypeError):
            context.exported_component_schemas_map["New"] = "New"

    def test_export_name_for_ref(self, petstore):
        context = generate_context(petstore)
        assert context.export_name_for_ref("#/components/schemas/Creature") == "Pet"
        assert context.export_name_for_ref("#/components/schemas/pet-status") == "pet_status"
        assert context.export_name_for_ref("#/components/schemas/PetId") is None
        assert context.export_name_for_ref("#/components/responses/Error") is None

    def test_config_is_applied(self, petstore):
        context = generate_context(petstore, ContextConfig(export_primitive_schemas=True))
        assert context.exported_component_schemas_map["PetId"] == "PetId"
        assert context.exported_component_schemas_map["Identifier"] == "PetId"

    def test_broken_alias_fails_the_whole_run(self, petstore):
        petstore["components"]["schemas"]["Broken"] = {"$ref": "#/components/schemas/Missing"}
        with pytest.raises(ResolveRefError):
            generate_context(petstore)

    def test_circular_aliases_fail_the_whole_run(self, petstore):
        petstore["components"]["schemas"]["A"] = {"$ref": "#/components/schemas/B"}
        petstore["components"]["schemas"]["B"] = {"$ref": "#/components/schemas/A"}
        with pytest.raises(CircularRefDependencyError):
            generate_context(petstore)

    def test_null_properties_fail_the_whole_run(self, petstore):
        petstore["components"]["schemas"]["Pet"]["properties"] = None
        with pytest.raises(UnexpectedError):
            generate_context(petstore)

    def test_empty_document(self):
        context = generate_context({"openapi": "3.0.3", "paths": {}})
        assert dict(context.exported_component_schemas_map) == {}


class TestContextConfig:
    """Test configuration loading"""

    def test_from_dict_ignores_unknown_keys(self):
        config = ContextConfig.from_dict({"export_primitive_schemas": True, "unknown": 1})
        assert config.export_primitive_schemas is True
        assert not hasattr(config, "unknown")

    def test_round_trip(self):
        config = ContextConfig(supported_ref_sections=["schemas"], collision_suffix_start=5)
        assert ContextConfig.from_dict(config.to_dict()) == config

    def test_default_sections_are_not_shared(self):
        first = ContextConfig()
        first.supported_ref_sections.append("pathItems")
        assert "pathItems" not in ContextConfig().supported_ref_sections
