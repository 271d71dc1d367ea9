"""Runtime protobuf message classes for the ``tzf.v1`` payloads.

The message layout mirrors ``tzf/v1/tzinfo.proto``. Descriptors are assembled
here instead of shipping generated ``_pb2`` modules:

    Point             { float lng = 1; float lat = 2; }
    Polygon           { repeated Point points = 1; repeated Polygon holes = 2; }
    Timezone          { repeated Polygon polygons = 1; string name = 2; }
    Timezones         { repeated Timezone timezones = 1; bool reduced = 2; string version = 3; }
    PreindexTimezone  { string name = 1; int32 z = 2; int32 x = 3; int32 y = 4; }
    PreindexTimezones { int32 idxZoom = 1; int32 aggZoom = 2;
                        repeated PreindexTimezone keys = 3; string version = 4; }
"""

from __future__ import annotations

from typing import Sequence, Tuple, Type

from google.protobuf import descriptor_pb2, descriptor_pool, message, message_factory

PACKAGE = "tzf.v1"

_F = descriptor_pb2.FieldDescriptorProto

FieldSpec = Tuple[str, int, int, int, str]

_MESSAGES: Sequence[Tuple[str, Sequence[FieldSpec]]] = (
    (
        "Point",
        (
            ("lng", 1, _F.TYPE_FLOAT, _F.LABEL_OPTIONAL, ""),
            ("lat", 2, _F.TYPE_FLOAT, _F.LABEL_OPTIONAL, ""),
        ),
    ),
    (
        "Polygon",
        (
            ("points", 1, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, "Point"),
            ("holes", 2, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, "Polygon"),
        ),
    ),
    (
        "Timezone",
        (
            ("polygons", 1, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, "Polygon"),
            ("name", 2, _F.TYPE_STRING, _F.LABEL_OPTIONAL, ""),
        ),
    ),
    (
        "Timezones",
        (
            ("timezones", 1, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, "Timezone"),
            ("reduced", 2, _F.TYPE_BOOL, _F.LABEL_OPTIONAL, ""),
            ("version", 3, _F.TYPE_STRING, _F.LABEL_OPTIONAL, ""),
        ),
    ),
    (
        "PreindexTimezone",
        (
            ("name", 1, _F.TYPE_STRING, _F.LABEL_OPTIONAL, ""),
            ("z", 2, _F.TYPE_INT32, _F.LABEL_OPTIONAL, ""),
            ("x", 3, _F.TYPE_INT32, _F.LABEL_OPTIONAL, ""),
            ("y", 4, _F.TYPE_INT32, _F.LABEL_OPTIONAL, ""),
        ),
    ),
    (
        "PreindexTimezones",
        (
            ("idxZoom", 1, _F.TYPE_INT32, _F.LABEL_OPTIONAL, ""),
            ("aggZoom", 2, _F.TYPE_INT32, _F.LABEL_OPTIONAL, ""),
            ("keys", 3, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, "PreindexTimezone"),
            ("version", 4, _F.TYPE_STRING, _F.LABEL_OPTIONAL, ""),
        ),
    ),
)


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="tzf/v1/tzinfo.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for message_name, fields in _MESSAGES:
        msg = proto.message_type.add(name=message_name)
        for field_name, number, field_type, label, type_name in fields:
            field = msg.field.add(name=field_name, number=number, type=field_type, label=label)
            if type_name:
                field.type_name = f".{PACKAGE}.{type_name}"
    return proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(_file_descriptor().SerializeToString())


def _message_class(name: str) -> Type[message.Message]:
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{PACKAGE}.{name}"))


Point = _message_class("Point")
Polygon = _message_class("Polygon")
Timezone = _message_class("Timezone")
Timezones = _message_class("Timezones")
PreindexTimezone = _message_class("PreindexTimezone")
PreindexTimezones = _message_class("PreindexTimezones")

DecodeError = message.DecodeError


__all__ = [
    "DecodeError",
    "Point",
    "Polygon",
    "PreindexTimezone",
    "PreindexTimezones",
    "Timezone",
    "Timezones",
]
