import importlib
import sys
from pathlib import Path

import socketio

from hrm.realtime import handle
from hrm.realtime.socketio import sio


def test_asgi_bootstrap_registers_socketio_server():
    asgi = importlib.reload(importlib.import_module("config.asgi"))

    assert handle.get_server() is sio
    assert isinstance(asgi.application, socketio.ASGIApp)


def test_asgi_bootstrap_leaves_sys_path_alone():
    before = list(sys.path)
    importlib.reload(importlib.import_module("config.asgi"))

    assert sys.path == before
    apps_dir = str(Path(__file__).resolve().parent.parent / "hrm")
    assert apps_dir not in sys.path
