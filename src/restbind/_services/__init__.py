from ._dispatcher import Dispatcher, RequestTransformer, merge_query
from ._streaming import StreamingConnection, StreamingDispatcher

__all__ = [
    "Dispatcher",
    "RequestTransformer",
    "merge_query",
    "StreamingConnection",
    "StreamingDispatcher",
]
