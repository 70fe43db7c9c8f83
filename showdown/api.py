import json
import logging
from typing import List

from pydantic import BaseModel
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest
from werkzeug.exceptions import HTTPException
from werkzeug.exceptions import InternalServerError
from werkzeug.routing import Map
from werkzeug.routing import Rule
from werkzeug.wrappers import Request
from werkzeug.wrappers import Response

from showdown import hands

logger = logging.getLogger(__name__)


class WinnersRequest(BaseModel):
    hands: List[str]


class WinnersResponse(BaseModel):
    winners: List[str]


class ClassifyRequest(BaseModel):
    hand: str


class ClassifyResponse(BaseModel):
    category: str
    ranked: List[str]
    kickers: List[str]
    ace_low: bool


class InvalidHandResponse(BaseModel):
    index: int
    hand: str
    reason: str


def _json_response(body, status=200):
    return Response(
        json.dumps(body), status=status, headers=(("Content-Type", "application/json"),)
    )


def _load(request, model):
    try:
        return model.model_validate(json.load(request.stream))
    except (ValueError, ValidationError) as ex:
        logger.info("Rejected request body: %s", ex)
        raise BadRequest(str(ex))


def route_winners(request) -> Response:
    data = _load(request, WinnersRequest)
    winners = hands.winning_hands(data.hands)
    return WinnersResponse(winners=winners)


def route_classify(request) -> Response:
    data = _load(request, ClassifyRequest)
    hand = hands.parse_hand(data.hand)
    return ClassifyResponse(
        category=hand.category.name,
        ranked=[str(card) for card in hand.ranked_group],
        kickers=[str(card) for card in hand.kickers],
        ace_low=hand.used_ace_low,
    )


url_map = Map(
    [
        Rule("/api/winners", endpoint=route_winners, methods=["POST"]),
        Rule("/api/classify", endpoint=route_classify, methods=["POST"]),
    ]
)


def dispatch(request):
    urls = url_map.bind_to_environ(request.environ)
    endpoint, args = urls.match()
    return endpoint(request, **args)


def json_middleware(environ, start_response):
    request = Request(environ)

    try:
        response = dispatch(request)
    except hands.InvalidHand as ex:
        logger.info("Invalid hand: %s", ex)
        body = InvalidHandResponse(index=ex.index, hand=ex.hand, reason=ex.reason)
        response = _json_response(body.model_dump(), status=400)

    if isinstance(response, BaseModel):
        response = _json_response(response.model_dump())

    return response(environ, start_response)


def exceptions_middleware(environ, start_response):
    try:
        return json_middleware(environ, start_response)
    except HTTPException as ex:
        return ex(environ, start_response)
    except Exception:
        logger.exception("Exception in request")
        return InternalServerError()(environ, start_response)


app = exceptions_middleware
