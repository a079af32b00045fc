"""
StudyMate Backend — Request Service Unit Tests
================================================

What we test:
    ✅ Create keeps free-form keys and stamps createdAt
    ✅ Client-sent _id / createdAt are dropped
    ✅ Listing matches userEmail (not email)
    ✅ Update merges only the keys present in the body
    ✅ Any store failure during update → UpdateFailedError
"""

from datetime import datetime

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from app.exceptions import (
    InvalidIdentifierError,
    InvalidSchemaError,
    MissingParameterError,
    UpdateFailedError,
)
from app.schemas.request import RequestCreate, RequestUpdate
from app.services.request_service import RequestService
from conftest import delete_result, insert_result, make_cursor, request_document, update_result


class TestCreateRequest:

    def setup_method(self):
        self.service = RequestService()

    @pytest.mark.asyncio
    async def test_create_keeps_extra_fields(self, mock_db, requests_collection):
        new_id = ObjectId()
        requests_collection.insert_one.return_value = insert_result(new_id)
        body = RequestCreate.model_validate({
            "userEmail": "sender@example.com",
            "partnerId": "65a1f0c2e4b0a1b2c3d4e5f6",
            "partnerName": "Ayesha Rahman",
            "subject": "Mathematics",
        })

        result = await self.service.create_request(mock_db, body)

        document = requests_collection.insert_one.await_args.args[0]
        assert document["userEmail"] == "sender@example.com"
        assert document["partnerId"] == "65a1f0c2e4b0a1b2c3d4e5f6"
        assert document["partnerName"] == "Ayesha Rahman"
        assert document["subject"] == "Mathematics"
        assert isinstance(document["createdAt"], datetime)
        assert result.inserted_id == str(new_id)

    @pytest.mark.asyncio
    async def test_server_managed_keys_are_dropped(self, mock_db, requests_collection):
        requests_collection.insert_one.return_value = insert_result()
        body = RequestCreate.model_validate({
            "_id": "client-chosen",
            "createdAt": "2001-01-01T00:00:00Z",
            "userEmail": "sender@example.com",
        })

        await self.service.create_request(mock_db, body)

        document = requests_collection.insert_one.await_args.args[0]
        assert "_id" not in document
        assert document["createdAt"].year != 2001

    def test_user_email_is_required(self):
        with pytest.raises(ValueError):
            RequestCreate.model_validate({"partnerId": "65a1f0c2e4b0a1b2c3d4e5f6"})

    def test_user_email_must_look_like_an_email(self):
        with pytest.raises(ValueError):
            RequestCreate.model_validate({"userEmail": "not-an-email"})


class TestListRequests:

    def setup_method(self):
        self.service = RequestService()

    @pytest.mark.asyncio
    async def test_filters_on_user_email(self, mock_db, requests_collection):
        oid = ObjectId()
        requests_collection.find.return_value = make_cursor([request_document(_id=oid)])

        result = await self.service.list_requests(mock_db, "sender@example.com")

        requests_collection.find.assert_called_once_with({"userEmail": "sender@example.com"})
        assert result[0].id == str(oid)
        assert result[0].user_email == "sender@example.com"

    @pytest.mark.asyncio
    async def test_extra_fields_survive_the_round_trip(self, mock_db, requests_collection):
        requests_collection.find.return_value = make_cursor([request_document()])

        result = await self.service.list_requests(mock_db, "sender@example.com")

        dumped = result[0].model_dump(by_alias=True)
        assert dumped["partnerName"] == "Ayesha Rahman"
        assert dumped["subject"] == "Mathematics"

    @pytest.mark.asyncio
    async def test_no_requests_is_empty_list(self, mock_db, requests_collection):
        requests_collection.find.return_value = make_cursor([])

        assert await self.service.list_requests(mock_db, "nobody@example.com") == []

    @pytest.mark.parametrize("email", [None, ""])
    @pytest.mark.asyncio
    async def test_missing_email(self, mock_db, requests_collection, email):
        with pytest.raises(MissingParameterError):
            await self.service.list_requests(mock_db, email)

        requests_collection.find.assert_not_called()


class TestUpdateRequest:

    def setup_method(self):
        self.service = RequestService()

    @pytest.mark.asyncio
    async def test_merges_only_given_fields(self, mock_db, requests_collection):
        oid = ObjectId()
        requests_collection.update_one.return_value = update_result()

        result = await self.service.update_request(
            mock_db, str(oid), RequestUpdate.model_validate({"subject": "Physics"})
        )

        requests_collection.update_one.assert_awaited_once_with(
            {"_id": oid}, {"$set": {"subject": "Physics"}}
        )
        assert result.modified_count == 1

    @pytest.mark.asyncio
    async def test_named_fields_use_stored_names(self, mock_db, requests_collection):
        requests_collection.update_one.return_value = update_result()

        await self.service.update_request(
            mock_db,
            str(ObjectId()),
            RequestUpdate.model_validate({"userEmail": "new@example.com", "note": "hi"}),
        )

        fields = requests_collection.update_one.await_args.args[1]["$set"]
        assert fields == {"userEmail": "new@example.com", "note": "hi"}

    @pytest.mark.asyncio
    async def test_id_and_created_at_in_body_are_ignored(self, mock_db, requests_collection):
        requests_collection.update_one.return_value = update_result()

        await self.service.update_request(
            mock_db,
            str(ObjectId()),
            RequestUpdate.model_validate({
                "_id": str(ObjectId()),
                "createdAt": "2001-01-01T00:00:00Z",
                "status": "accepted",
            }),
        )

        fields = requests_collection.update_one.await_args.args[1]["$set"]
        assert fields == {"status": "accepted"}

    @pytest.mark.asyncio
    async def test_empty_body_is_rejected(self, mock_db, requests_collection):
        with pytest.raises(InvalidSchemaError):
            await self.service.update_request(mock_db, str(ObjectId()), RequestUpdate())

        requests_collection.update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_becomes_update_failed(self, mock_db, requests_collection):
        requests_collection.update_one.side_effect = OperationFailure("write conflict")

        with pytest.raises(UpdateFailedError) as exc_info:
            await self.service.update_request(
                mock_db, str(ObjectId()), RequestUpdate.model_validate({"status": "x"})
            )

        assert exc_info.value.message == "Failed to update request"

    @pytest.mark.asyncio
    async def test_malformed_id(self, mock_db, requests_collection):
        with pytest.raises(InvalidIdentifierError):
            await self.service.update_request(
                mock_db, "123", RequestUpdate.model_validate({"status": "x"})
            )

        requests_collection.update_one.assert_not_awaited()


class TestDeleteRequest:

    @pytest.mark.asyncio
    async def test_delete(self, mock_db, requests_collection):
        oid = ObjectId()
        requests_collection.delete_one.return_value = delete_result(1)

        result = await RequestService().delete_request(mock_db, str(oid))

        requests_collection.delete_one.assert_awaited_once_with({"_id": oid})
        assert result.deleted_count == 1
