import pytest

from gateway_sdk import (
    AccountRole,
    BuildOptions,
    Cluster,
    CuPriceRange,
    DeliveryMethod,
    Encoding,
    GatewayClient,
    GatewayResponseError,
    GatewayRpcError,
    InvalidConfigError,
    JitoTipRange,
    SendOptions,
    TipAccountMeta,
    TipInstruction,
    create_gateway_client,
    gateway_endpoint,
)

BUILT = {
    "transaction": "AQID",
    "latestBlockhash": {"blockhash": "EkSnNWid2cvwEVnVx9aBqawnmiCNiDgp3gUdkDPTKN1N", "lastValidBlockHeight": "12345"},
}


def test_endpoint_is_pure_function_of_key_and_cluster():
    first = create_gateway_client("K", "devnet")
    second = create_gateway_client("K", Cluster.DEVNET)

    assert first.endpoint == second.endpoint == "https://tpg.sanctum.so/v1/devnet?apiKey=K"
    assert gateway_endpoint("K", "devnet") == first.endpoint
    assert create_gateway_client("K", "mainnet").endpoint == "https://tpg.sanctum.so/v1/mainnet?apiKey=K"


def test_endpoint_quotes_api_key_and_honors_host():
    assert gateway_endpoint("a b&c", Cluster.DEVNET, host="gw.local") == (
        "https://gw.local/v1/devnet?apiKey=a%20b%26c"
    )


def test_invalid_configuration():
    with pytest.raises(InvalidConfigError):
        GatewayClient("K", "testnet")
    with pytest.raises(InvalidConfigError):
        GatewayClient("", Cluster.DEVNET)


def test_build_gateway_transaction_without_options(session):
    session.queue_result(BUILT)
    client = GatewayClient("K", Cluster.DEVNET, session=session)

    built = client.build_gateway_transaction("unsigned")

    assert session.last_body["method"] == "buildGatewayTransaction"
    assert session.last_body["params"] == ["unsigned", {}]
    assert built.transaction == "AQID"
    assert built.latest_blockhash.blockhash == BUILT["latestBlockhash"]["blockhash"]
    assert built.latest_blockhash.last_valid_block_height == "12345"


def test_build_gateway_transaction_omits_unset_options(session):
    session.queue_result(BUILT)
    client = GatewayClient("K", Cluster.DEVNET, session=session)

    client.build_gateway_transaction(
        "unsigned",
        BuildOptions(encoding=Encoding.BASE64, delivery_method_type=DeliveryMethod.SANCTUM_SENDER),
    )

    assert session.last_body["params"][1] == {
        "encoding": "base64",
        "deliveryMethodType": "sanctum-sender",
    }


def test_build_gateway_transaction_all_options(session):
    session.queue_result(BUILT)
    client = GatewayClient("K", Cluster.MAINNET, session=session)

    client.build_gateway_transaction(
        "unsigned",
        BuildOptions(
            encoding=Encoding.BASE58,
            skip_simulation=False,
            skip_priority_fee=True,
            cu_price_range=CuPriceRange.HIGH,
            jito_tip_range=JitoTipRange.MAX,
            expire_in_slots=0,
            delivery_method_type=DeliveryMethod.JITO,
        ),
    )

    assert session.last_body["params"][1] == {
        "encoding": "base58",
        "skipSimulation": False,
        "skipPriorityFee": True,
        "cuPriceRange": "high",
        "jitoTipRange": "max",
        "expireInSlots": 0,
        "deliveryMethodType": "jito",
    }


def test_build_gateway_transaction_rejects_unknown_shape(session):
    session.queue_result({"transaction": "AQID"})
    client = GatewayClient("K", Cluster.DEVNET, session=session)

    with pytest.raises(GatewayResponseError):
        client.build_gateway_transaction("unsigned")


def test_get_tip_instructions(session):
    session.queue_result(
        [
            {
                "programAddress": "11111111111111111111111111111111",
                "accounts": [
                    {"address": "EkSnNWid2cvwEVnVx9aBqawnmiCNiDgp3gUdkDPTKN1N", "role": 3},
                    {"address": "4wTV1YmiEkRvAtNtsSGPtUrqRYQMe5SKy2uB4Jjaxnjf", "role": 1},
                ],
                "data": {"1": 20, "0": 10},
            }
        ]
    )
    client = GatewayClient("K", Cluster.MAINNET, session=session)

    tips = client.get_tip_instructions(
        "payer", delivery_method=DeliveryMethod.JITO, jito_tip_range=JitoTipRange.LOW
    )

    assert session.last_body["method"] == "getTipInstructions"
    assert session.last_body["params"] == [
        {"feePayer": "payer", "jitoTipRange": "low", "deliveryMethodType": "jito"}
    ]
    assert len(tips) == 1
    assert tips[0].data == bytes([10, 20])
    assert tips[0].accounts[0].role is AccountRole.WRITABLE_SIGNER
    assert tips[0].accounts[0].is_signer and tips[0].accounts[0].is_writable
    assert not tips[0].accounts[1].is_signer and tips[0].accounts[1].is_writable


def test_tip_instruction_wire_shape_round_trip():
    tip = TipInstruction(
        program_address="11111111111111111111111111111111",
        accounts=[
            TipAccountMeta(address="EkSnNWid2cvwEVnVx9aBqawnmiCNiDgp3gUdkDPTKN1N", role=AccountRole.READONLY_SIGNER),
            TipAccountMeta(address="4wTV1YmiEkRvAtNtsSGPtUrqRYQMe5SKy2uB4Jjaxnjf", role=AccountRole.READONLY),
        ],
        data=bytes(range(12)),
    )

    wire = tip.to_dict()

    assert wire["accounts"][0] == {"address": "EkSnNWid2cvwEVnVx9aBqawnmiCNiDgp3gUdkDPTKN1N", "role": 2}
    assert wire["data"]["10"] == 10
    assert TipInstruction.from_dict(wire) == tip


def test_get_tip_instructions_only_fee_payer(session):
    session.queue_result([])
    client = GatewayClient("K", Cluster.DEVNET, session=session)

    assert client.get_tip_instructions("payer") == []
    assert session.last_body["params"] == [{"feePayer": "payer"}]


@pytest.mark.parametrize(
    "result",
    [
        {"not": "a list"},
        [{"accounts": []}],
        [{"programAddress": "p", "accounts": [{"address": "a", "role": 7}]}],
        [{"programAddress": "p", "accounts": [], "data": {"0": 300}}],
        [{"programAddress": "p", "data": {"0": 1}}],
        [{"programAddress": "p", "accounts": [], "data": {"1": 5, "01": 6}}],
    ],
)
def test_get_tip_instructions_rejects_bad_shapes(session, result):
    session.queue_result(result)
    client = GatewayClient("K", Cluster.DEVNET, session=session)

    with pytest.raises(GatewayResponseError):
        client.get_tip_instructions("payer")


def test_send_transaction_defaults_to_base64(session):
    session.queue_result("5sig")
    client = GatewayClient("K", Cluster.DEVNET, session=session)

    assert client.send_transaction("signed") == "5sig"
    assert session.last_body["method"] == "sendTransaction"
    assert session.last_body["params"] == ["signed", {"encoding": "base64"}]


def test_send_transaction_with_options(session):
    session.queue_result("5sig")
    client = GatewayClient("K", Cluster.DEVNET, session=session)

    client.send_transaction("signed", SendOptions(encoding=Encoding.BASE58, start_slot=42))
    assert session.last_body["params"] == ["signed", {"encoding": "base58", "startSlot": 42}]

    session.queue_result("5sig")
    client.send_transaction("signed", SendOptions())
    assert session.last_body["params"] == ["signed", {}]


def test_send_transaction_propagates_rpc_error(session):
    session.queue(body={"error": {"code": -32000, "message": "No delivery methods found"}})
    client = GatewayClient("K", Cluster.DEVNET, session=session)

    with pytest.raises(GatewayRpcError) as exc:
        client.send_transaction("signed")
    assert "No delivery methods found" in str(exc.value)
    assert exc.value.code == -32000


def test_send_transaction_rejects_non_string_result(session):
    session.queue_result({"signature": "5sig"})
    client = GatewayClient("K", Cluster.DEVNET, session=session)

    with pytest.raises(GatewayResponseError):
        client.send_transaction("signed")
