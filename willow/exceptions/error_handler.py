"""
Centralized Error Handler
"""
import html
import traceback
from http import HTTPStatus
from typing import Any, Dict

from sanic import Request, Sanic
from sanic.exceptions import SanicException
from sanic.response import HTTPResponse
from sanic.response import html as html_response
from sanic.response import json as json_response

from willow.logging import getLogger
from willow.support import Config


class ErrorHandler:
    """
    Renders every unhandled error as JSON or as a small HTML page

    JSON is chosen when the request asks for it (Accept or Content-Type
    contain 'json'), is an AJAX request, or targets the configured
    `api.path` prefix.
    """
    PAGE = (
        '<!DOCTYPE html><html><head><title>{code}</title></head>'
        '<body><h1>{code} {status}</h1><p>{text}</p></body></html>'
    )

    def __init__(self, debug: bool = False, include_trace: bool = False):
        """
        Args:
            debug: Show internal error messages
            include_trace: Include stack trace in 500 responses (only in debug)
        """
        self.debug = debug
        self.include_trace = include_trace and debug
        self.logger = getLogger('willow.errors')

    def install(self, sanic_app: Sanic) -> 'ErrorHandler':
        sanic_app.error_handler.add(Exception, self.handle_error)
        return self

    async def handle_error(self, request: Request, error: Exception) -> HTTPResponse:
        """Handle error and return a consistent response"""
        error_record = self.build_error(error)
        self.log_error(error_record, request)

        if self.is_json(request):
            return self.error_json(error_record, trace=self.include_trace and error_record['code'] >= 500)

        return html_response(
            self.PAGE.format(
                code=error_record['code'],
                status=html.escape(error_record['status']),
                text=html.escape(error_record['text']),
            ),
            status=error_record['code'],
        )

    def build_error(self, error: Exception) -> Dict[str, Any]:
        """
        Structured error record

        Returns:
            {'code': 404, 'status': 'Not Found', 'text': '...', 'trace': '...'}
        """
        code = self._get_status_code(error)
        try:
            status = HTTPStatus(code).phrase
        except ValueError:
            status = 'Error'

        return {
            'code': code,
            'status': status,
            'text': self._get_error_message(error, code),
            'trace': ''.join(traceback.format_exception(type(error), error, error.__traceback__)),
        }

    def is_json(self, request: Request) -> bool:
        from willow.routing.sanic_registrar import is_ajax

        accept = request.headers.get('Accept') or ''
        content_type = request.headers.get('Content-Type') or ''
        if 'json' in accept or 'json' in content_type or is_ajax(request):
            return True

        api_path = Config.get('api.path')
        return bool(api_path) and request.path.startswith(api_path)

    @staticmethod
    def error_json(error_record: Dict[str, Any], trace: bool = True) -> HTTPResponse:
        body = dict(error_record)
        if not trace:
            body.pop('trace', None)
        return json_response(body, status=error_record['code'])

    def log_error(self, error_record: Dict[str, Any], request: Request, trace: bool = True):
        """Log '<code>: <status> - <text>', with the trace for server errors"""
        message = f"{error_record['code']}: {error_record['status']} - {error_record['text']}"
        extra = {'method': request.method, 'path': request.path}

        if error_record['code'] >= 500:
            if trace:
                message = f"{message}. trace: {error_record['trace']}"
            self.logger.error(message, extra=extra)
        else:
            self.logger.warning(message, extra=extra)

    def _get_error_message(self, error: Exception, code: int) -> str:
        """Get user-friendly error message"""
        if isinstance(error, SanicException):
            return str(error)

        if hasattr(error, 'message') and isinstance(error.message, str):
            return error.message

        # Don't expose internals outside debug
        if not self.debug and code >= 500:
            return "An error occurred while processing your request"

        return str(error)

    @staticmethod
    def _get_status_code(error: Exception) -> int:
        if isinstance(error, SanicException):
            return error.status_code

        status_code = getattr(error, 'status_code', None)
        if isinstance(status_code, int):
            return status_code

        return 500
