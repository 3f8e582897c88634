"""
Default tables.

Immutable data copied into each configuration: the known events and their
subscription patterns, the method renames, and the events emitted while the
event API is still settling.
"""

from __future__ import annotations

from types import MappingProxyType

from .analyzer.ir_nodes import EventCategory

WAIT_FOR = EventCategory.WAIT_FOR
LISTENER = EventCategory.LISTENER
HANDLER = EventCategory.HANDLER

DEFAULT_EVENTS = MappingProxyType(
    {
        "Browser.disconnected": ("Disconnected", WAIT_FOR),
        "BrowserContext.page": ("Page", WAIT_FOR),
        "Page.console": ("Console", LISTENER),
        "Page.crash": ("Crash", WAIT_FOR),
        "Page.dialog": ("Dialog", HANDLER),
        "Page.domcontentloaded": ("DomContentLoaded", WAIT_FOR),
        "Page.download": ("Download", WAIT_FOR),
        "Page.filechooser": ("FileChooser", HANDLER),
        "Page.frameattached": ("FrameAttached", WAIT_FOR),
        "Page.framedetached": ("FrameDetached", WAIT_FOR),
        "Page.framenavigated": ("FrameNavigated", WAIT_FOR),
        "Page.load": ("Load", WAIT_FOR),
        "Page.pageerror": ("Error", LISTENER),
        "Page.popup": ("Popup", WAIT_FOR),
        "Page.request": ("Request", WAIT_FOR),
        "Page.requestfailed": ("RequestFailed", WAIT_FOR),
        "Page.requestfinished": ("RequestFinished", WAIT_FOR),
        "Page.response": ("Response", WAIT_FOR),
        "Page.worker": ("Worker", WAIT_FOR),
        "Worker.close": ("Close", WAIT_FOR),
        "ChromiumBrowser.disconnected": ("Disconnected", WAIT_FOR),
        "ChromiumBrowserContext.backgroundpage": ("BackgroundPage", WAIT_FOR),
        "ChromiumBrowserContext.serviceworker": ("ServiceWorker", WAIT_FOR),
        "ChromiumBrowserContext.page": ("Page", WAIT_FOR),
        "FirefoxBrowser.disconnected": ("Disconnected", WAIT_FOR),
        "WebKitBrowser.disconnected": ("Disconnected", WAIT_FOR),
    }
)

# Names that are reserved words in Java or read better under another name
DEFAULT_METHOD_RENAMES = MappingProxyType(
    {
        "continue": "continue_",
        "$eval": "evalOnSelector",
        "$$eval": "evalOnSelectorAll",
        "$": "querySelector",
        "$$": "querySelectorAll",
        "goto": "navigate",
    }
)

# TODO: emit every classified event once the event API is stable.
DEFAULT_EVENT_ALLOW_LIST = ("Page.console", "Page.popup")

DEFAULT_IMPORTS = ("java.util.*", "java.util.function.BiConsumer")
