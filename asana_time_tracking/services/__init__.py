"""Services Layer — resource facades over the request dispatcher.

Invariants:
    - Services reach the network only through core.dispatcher_protocol.RequestDispatcher
    - Services hold no state besides the injected dispatcher
"""
