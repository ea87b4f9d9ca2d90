"""Tests for the common property analyzer."""

from __future__ import annotations

import pytest

from centralconfig.engines.property_analyzer import (
    commonality_threshold,
    extract_common_properties,
)
from centralconfig.models.project import ProjectDocument


class TestThreshold:
    @pytest.mark.parametrize(
        "n,expected",
        [(0, 0), (1, 1), (2, 2), (3, 2), (4, 2), (5, 3), (10, 5), (11, 6)],
    )
    def test_threshold(self, n, expected):
        assert commonality_threshold(n) == expected


class TestExtractCommonProperties:
    def test_two_documents_must_agree(self, make_document):
        docs = [
            make_document("A.csproj", {"TargetFramework": "net8.0", "Authors": "alice"}),
            make_document("B.csproj", {"TargetFramework": "net8.0", "Authors": "bob"}),
        ]
        result = extract_common_properties(docs)
        assert result.properties == {"TargetFramework": "net8.0"}
        assert result.threshold == 2

    def test_majority_of_five(self, make_document):
        docs = [
            make_document("A.csproj", {"LangVersion": "latest", "Company": "Contoso"}),
            make_document("B.csproj", {"LangVersion": "latest", "Company": "Contoso"}),
            make_document("C.csproj", {"LangVersion": "latest"}),
            make_document("D.csproj", {"LangVersion": "12"}),
            make_document("E.csproj", {}),
        ]
        result = extract_common_properties(docs)
        assert result.properties == {"LangVersion": "latest"}
        assert result.threshold == 3

    def test_single_document_hoists_everything(self, make_document):
        docs = [make_document("A.csproj", {"TargetFramework": "net8.0", "OutputType": "Exe"})]
        result = extract_common_properties(docs)
        assert result.properties == {"TargetFramework": "net8.0", "OutputType": "Exe"}

    def test_no_documents(self):
        result = extract_common_properties([])
        assert result.properties == {}
        assert result.document_count == 0

    def test_blank_values_are_never_common(self, make_document):
        docs = [
            make_document("A.csproj", {"Description": "", "RootNamespace": "   "}),
            make_document("B.csproj", {"Description": "", "RootNamespace": "   "}),
        ]
        assert extract_common_properties(docs).properties == {}

    def test_every_value_meets_threshold(self, make_document):
        docs = [
            make_document(f"P{i}.csproj", {"Nullable": "enable" if i < 4 else "disable"})
            for i in range(7)
        ]
        result = extract_common_properties(docs)
        assert result.properties == {"Nullable": "enable"}
        assert result.threshold == 4

    def test_tie_goes_to_first_value_seen(self, make_document):
        docs = [
            make_document("A.csproj", {"Version": "1.0"}),
            make_document("B.csproj", {"Version": "2.0"}),
            make_document("C.csproj", {"Version": "2.0"}),
            make_document("D.csproj", {"Version": "1.0"}),
        ]
        assert extract_common_properties(docs).properties == {"Version": "1.0"}


class TestDocumentShapes:
    def test_last_declaration_in_group_wins(self):
        content = """<Project>
  <PropertyGroup>
    <Nullable>disable</Nullable>
    <Nullable>enable</Nullable>
  </PropertyGroup>
</Project>
"""
        docs = [ProjectDocument("A.csproj", content), ProjectDocument("B.csproj", content)]
        assert extract_common_properties(docs).properties == {"Nullable": "enable"}

    def test_separate_groups_each_count(self, make_document):
        twice = """<Project>
  <PropertyGroup><Deterministic>true</Deterministic></PropertyGroup>
  <PropertyGroup><Deterministic>true</Deterministic></PropertyGroup>
</Project>
"""
        docs = [ProjectDocument("A.csproj", twice), make_document("B.csproj", {})]
        assert extract_common_properties(docs).properties == {"Deterministic": "true"}

    def test_overridden_value_in_later_group_does_not_count(self, make_document):
        overridden = """<Project>
  <PropertyGroup><LangVersion>10</LangVersion></PropertyGroup>
  <PropertyGroup><LangVersion>latest</LangVersion></PropertyGroup>
</Project>
"""
        docs = [
            ProjectDocument("A.csproj", overridden),
            make_document("B.csproj", {"LangVersion": "10"}),
            make_document("C.csproj", {"LangVersion": "preview"}),
        ]
        result = extract_common_properties(docs)
        assert result.threshold == 2
        assert result.properties == {}

    def test_last_group_value_is_the_one_counted(self, make_document):
        overridden = """<Project>
  <PropertyGroup><LangVersion>10</LangVersion></PropertyGroup>
  <PropertyGroup><LangVersion>latest</LangVersion></PropertyGroup>
</Project>
"""
        docs = [
            ProjectDocument("A.csproj", overridden),
            make_document("B.csproj", {"LangVersion": "latest"}),
            make_document("C.csproj", {"LangVersion": "10"}),
        ]
        assert extract_common_properties(docs).properties == {"LangVersion": "latest"}

    def test_namespaced_project(self):
        content = """<?xml version="1.0" encoding="utf-8"?>
<Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">
  <PropertyGroup>
    <TargetFrameworkVersion>v4.8</TargetFrameworkVersion>
  </PropertyGroup>
</Project>
"""
        result = extract_common_properties([ProjectDocument("Legacy.csproj", content)])
        assert result.properties == {"TargetFrameworkVersion": "v4.8"}


class TestMalformedDocuments:
    def test_skipped_but_counted_in_threshold(self, make_document):
        docs = [
            make_document("A.csproj", {"TargetFramework": "net8.0"}),
            ProjectDocument("Broken.csproj", "<Project><PropertyGroup>"),
            make_document("C.csproj", {"TargetFramework": "net8.0"}),
            ProjectDocument("Empty.csproj", ""),
        ]
        result = extract_common_properties(docs)

        assert result.document_count == 4
        assert result.threshold == 2
        assert result.properties == {"TargetFramework": "net8.0"}
        assert [s.path for s in result.skipped] == ["Broken.csproj", "Empty.csproj"]

    def test_all_malformed(self):
        docs = [ProjectDocument("A.csproj", "nope"), ProjectDocument("B.csproj", "<")]
        result = extract_common_properties(docs)
        assert result.properties == {}
        assert len(result.skipped) == 2
