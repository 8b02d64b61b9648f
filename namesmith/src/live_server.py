"""WebSocket server for the browser name-generator page."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import websockets
from websockets.datastructures import Headers
from websockets.http11 import Response

from .errors import NamesmithError
from .service import NameService

logger = logging.getLogger(__name__)

INDEX_HTML = Path(__file__).parent.parent / "viz" / "index.html"


class LiveServer:
    """Serves index.html and answers generate/history commands over WebSocket."""

    def __init__(self, service: NameService, host: str = "localhost", port: int = 8765):
        self.service = service
        self.host = host
        self.port = port
        self.clients: set = set()
        self._server = None

    async def start(self) -> None:
        """Start the WebSocket server."""
        self._server = await websockets.serve(
            self._handler,
            self.host,
            self.port,
            process_request=self._serve_http,
        )
        logger.info("Live server running at http://%s:%d", self.host, self.port)

    def _serve_http(self, connection, request):
        """Serve the page and the JSON endpoints for regular HTTP requests."""
        # Only intercept non-upgrade requests (regular HTTP GET)
        if request.headers.get("Upgrade", "").lower() == "websocket":
            return None

        path = request.path.split("?", 1)[0]
        if path in ("/", "/index.html"):
            if INDEX_HTML.exists():
                body = INDEX_HTML.read_bytes()
                headers = Headers([
                    ("Content-Type", "text/html; charset=utf-8"),
                    ("Content-Length", str(len(body))),
                ])
                return Response(200, "OK", headers, body)
            headers = Headers([("Content-Type", "text/plain")])
            return Response(404, "Not Found", headers, b"index.html not found")

        if path == "/api/used_names.json":
            return self._api_export()
        if path == "/api/history":
            return self._json_response({"count": len(self.service.history)})

        headers = Headers([("Content-Type", "text/plain")])
        return Response(404, "Not Found", headers, b"Not Found")

    def _json_response(self, data: dict | list) -> Response:
        """Return a JSON HTTP response."""
        body = json.dumps(data).encode()
        headers = Headers([
            ("Content-Type", "application/json"),
            ("Content-Length", str(len(body))),
            ("Access-Control-Allow-Origin", "*"),
        ])
        return Response(200, "OK", headers, body)

    def _api_export(self) -> Response:
        """Offer the persisted used names as a file download."""
        payload = self.service.history.export()
        body = payload.content.encode()
        headers = Headers([
            ("Content-Type", payload.mime_type),
            ("Content-Length", str(len(body))),
            ("Content-Disposition", f'attachment; filename="{payload.filename}"'),
        ])
        return Response(200, "OK", headers, body)

    async def _handler(self, ws) -> None:
        """Handle a single WebSocket client connection."""
        self.clients.add(ws)
        logger.info("Client connected (%d total)", len(self.clients))
        try:
            await ws.send(json.dumps(self._history_message()))
            async for message in ws:
                try:
                    cmd = json.loads(message)
                except json.JSONDecodeError:
                    logger.warning("Invalid JSON from client: %s", message[:100])
                    continue
                reply = await self.handle_command(cmd)
                if reply is not None:
                    await ws.send(json.dumps(reply))
        except websockets.ConnectionClosed:
            pass
        finally:
            self.clients.discard(ws)
            logger.info("Client disconnected (%d remaining)", len(self.clients))

    async def handle_command(self, cmd: dict) -> dict | None:
        """Dispatch one client command. Returns the reply for the sender, if any."""
        if not isinstance(cmd, dict):
            logger.warning("Rejecting non-object command: %s", type(cmd).__name__)
            return {
                "type": "error",
                "kind": "InvalidInput",
                "message": f"Command must be a JSON object, got {type(cmd).__name__}",
            }

        action = cmd.get("action")
        if action == "generate":
            history_size = len(self.service.history)
            try:
                result = await self.service.generate(cmd)
            except NamesmithError as e:
                logger.error("Generation failed: %s", e)
                return {"type": "error", "kind": type(e).__name__, "message": str(e)}
            # Only global-scope requests grow the history
            if len(self.service.history) != history_size:
                await self.broadcast(self._history_message())
            reply = {"type": "result", **result.to_dict()}
            if result.shortfall_message:
                reply["message"] = result.shortfall_message
            return reply
        if action == "clear_history":
            outcome = self.service.clear_history()
            await self.broadcast(self._history_message())
            return {"type": "history_cleared", "ok": outcome.ok}
        if action == "history":
            return self._history_message()

        logger.warning("Unknown command: %s", action)
        return {"type": "error", "kind": "InvalidInput", "message": f"Unknown action {action!r}"}

    def _history_message(self) -> dict:
        return {"type": "history", "count": len(self.service.history)}

    async def broadcast(self, data: dict) -> None:
        """Send data to all connected clients."""
        if not self.clients:
            return
        msg = json.dumps(data)
        # Send to all, ignore individual failures
        await asyncio.gather(
            *[client.send(msg) for client in self.clients],
            return_exceptions=True,
        )

    async def serve_forever(self) -> None:
        """Start and block until cancelled."""
        await self.start()
        try:
            await asyncio.Future()
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Shut down the server."""
        if self._server:
            self._server.close()
            await self._server.wait_closed()
            logger.info("Live server stopped")
