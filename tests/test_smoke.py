"""
Smoke tests：驗證套件可匯入、版本與公開 API 存在。
"""
import pytest


def test_import_package():
    """套件可正常匯入"""
    import tokensheet
    assert tokensheet.__version__ == "0.1.0"


def test_public_api():
    """公開 API 可從 tokensheet 取得"""
    from tokensheet import (
        __version__,
        generate,
        instance_names,
        load_collection,
        collection_from_dict,
        load_config,
        validate_config,
        GenerationOptions,
        GenerationResult,
        NamingContext,
        UnsupportedDialectError,
        TokensheetError,
    )
    assert __version__ == "0.1.0"
    assert issubclass(UnsupportedDialectError, TokensheetError)
    assert callable(generate)
    assert callable(load_collection)
    assert callable(load_config)


def test_generate_minimal_collection():
    """最小合法 token 集合可產生所有格式"""
    from tokensheet import DIALECTS, collection_from_dict, generate

    collection = collection_from_dict({
        "tokens": [
            {"type": "style", "name": "box", "property": "gap", "value": "8px", "rawValue": "8px",
             "path": ["Page", "Box"]},
        ]
    })
    for dialect in DIALECTS:
        result = generate(collection, dialect)
        assert result.result
        assert result.warnings == []
        assert result.errors == []


def test_all_exports_resolve():
    import tokensheet
    for name in tokensheet.__all__:
        assert hasattr(tokensheet, name), name
