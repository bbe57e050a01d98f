import io
from flask import Response
from http import HTTPStatus


class SAJSONResponse(Response):
    """
    Response for encoded documents
    """

    default_mimetype = "application/json"


def make_encoded_response(encoder_service, resource_entity, objects, status=HTTPStatus.OK.value) -> SAJSONResponse:
    """
    Encode the objects into a {"data": [...], "total": N} response.
    The document is completely written before the response is created, errors are
    raised here instead of in the middle of a streamed body

    :param encoder_service: EncoderService
    :param resource_entity: ResourceEntity of the objects
    :param objects: instances or a single instance
    :param status: HTTP status code
    :return: SAJSONResponse
    """
    body = io.BytesIO()
    encoder_service.encode(resource_entity, objects, body)
    return SAJSONResponse(body.getvalue(), status=status)
