import pytest


@pytest.fixture
def test_message_schema():
    return """
syntax = "proto3";

message TestFileMessage {
    int32 my_int = 1;
    string my_string = 10;
    bool my_bool = 20;
}
"""
