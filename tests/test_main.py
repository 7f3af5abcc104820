"""
Tests for the command-line entry point.
"""

import json
from unittest.mock import patch

import pytest

import main
from api.alternative import AlternativeClient, SentimentReading
from api.errors import ApplicationError, TransportError, UpstreamError
from api.kraken import KrakenClient
from api.oneinch import OneInchRouter, Token


def _stdout_json(capsys):
    return json.loads(capsys.readouterr().out)


class TestArgumentParsing:

    def test_no_command_prints_help(self, capsys):
        assert main.main([]) == 0
        assert "usage: swapfeed" in capsys.readouterr().out

    def test_chain_id_by_name(self):
        args = main.build_parser().parse_args(["--chain-id", "Polygon", "health"])
        assert args.chain_id == 137

    def test_chain_id_by_number(self):
        args = main.build_parser().parse_args(["--chain-id", "42161", "health"])
        assert args.chain_id == 42161

    def test_unknown_chain_rejected(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args(["--chain-id", "moon", "health"])

    def test_parse_params(self):
        assert main._parse_params(["amount=100", "slippage=1"]) == {
            "amount": "100",
            "slippage": "1",
        }

    def test_parse_params_keeps_equals_in_value(self):
        assert main._parse_params(["data=a=b"]) == {"data": "a=b"}


class TestCommands:

    def test_fear_index(self, capsys):
        reading = SentimentReading(fear_greed_index=55.0, fear_greed_index_classification="Greed")

        with patch.object(AlternativeClient, "get_crypto_fear_index", return_value=reading):
            assert main.main(["fear-index"]) == 0

        assert _stdout_json(capsys) == {
            "fear_greed_index": 55.0,
            "fear_greed_index_classification": "Greed",
        }

    def test_price(self, capsys):
        with patch.object(KrakenClient, "get_coin_price", return_value=50000.1) as mock_price:
            assert main.main(["price", "xbtusd"]) == 0

        mock_price.assert_called_once_with("xbtusd")
        assert _stdout_json(capsys) == {"pair": "XBTUSD", "ask": 50000.1}

    def test_health(self, capsys):
        with patch.object(OneInchRouter, "get_health_status", return_value=True):
            assert main.main(["--chain-id", "bsc", "health"]) == 0

        assert _stdout_json(capsys) == {"chain_id": 56, "healthy": True}

    def test_tokens_symbol_filter(self, capsys):
        tokens = [
            Token(symbol="USDC", address="0x1", decimals=6),
            Token(symbol="WETH", address="0x2", decimals=18),
        ]

        with patch.object(OneInchRouter, "get_supported_tokens", return_value=tokens):
            assert main.main(["tokens", "--symbol", "weth"]) == 0

        output = _stdout_json(capsys)
        assert [t["symbol"] for t in output] == ["WETH"]

    def test_allowance_printed_as_string(self, capsys):
        with patch.object(OneInchRouter, "get_approved_allowance", return_value=2**256 - 1):
            assert main.main(["allowance", "0xtoken", "0xwallet"]) == 0

        assert _stdout_json(capsys)["allowance"] == str(2**256 - 1)

    def test_approve_tx_default_unlimited(self, capsys):
        with patch.object(
            OneInchRouter, "get_approve_transaction_data", return_value={"data": "0x"}
        ) as mock_approve:
            assert main.main(["approve-tx", "0xtoken"]) == 0

        mock_approve.assert_called_once_with("0xtoken", "-1")

    def test_quote_params(self, capsys):
        with patch.object(OneInchRouter, "get_quote", return_value={"toTokenAmount": "9"}) as mock_quote:
            assert main.main(["quote", "-p", "amount=10", "-p", "fromTokenAddress=0xa"]) == 0

        mock_quote.assert_called_once_with({"amount": "10", "fromTokenAddress": "0xa"})
        assert _stdout_json(capsys) == {"toTokenAmount": "9"}

    def test_swap_tx_bad_param(self):
        assert main.main(["swap-tx", "-p", "amount"]) == 2

    def test_broadcast(self, capsys):
        with patch.object(OneInchRouter, "broadcast_raw_transaction", return_value="0xhash"):
            assert main.main(["broadcast", "0xraw"]) == 0

        assert _stdout_json(capsys) == {"transaction_hash": "0xhash"}


class TestCommandErrors:

    def test_application_error_exit_code(self):
        with patch.object(
            KrakenClient,
            "get_coin_price",
            side_effect=ApplicationError("EQuery:Unknown asset pair"),
        ):
            assert main.main(["price", "nope"]) == 1

    def test_upstream_error_exit_code(self):
        with patch.object(
            OneInchRouter,
            "get_contract_address",
            side_effect=UpstreamError({"error": "Bad Request"}, status_code=400),
        ):
            assert main.main(["spender"]) == 1

    def test_transport_error_exit_code(self):
        with patch.object(
            AlternativeClient, "get_crypto_fear_index", side_effect=TransportError()
        ):
            assert main.main(["fear-index"]) == 1

    def test_keyboard_interrupt(self):
        with patch.object(KrakenClient, "get_coin_price", side_effect=KeyboardInterrupt):
            assert main.main(["price", "xbtusd"]) == 130


class TestWatchCommand:

    def test_reports_trigger(self, capsys):
        """Test that a rebound after a dip triggers a buy."""
        prices = [100.0, 100.2, 90.0, 91.0]

        with patch.object(KrakenClient, "get_coin_price", side_effect=prices), \
                patch("main.time.sleep") as mock_sleep:
            assert main.main(["watch", "XBTUSD", "--iterations", "3", "--interval", "0"]) == 0

        assert mock_sleep.call_count == 2
        assert _stdout_json(capsys) == {
            "pair": "XBTUSD",
            "order_type": "BUY",
            "price": 91.0,
        }

    def test_reference_price_skips_initial_fetch(self, capsys):
        with patch.object(KrakenClient, "get_coin_price", side_effect=[100.1]) as mock_price, \
                patch("main.time.sleep"):
            assert main.main([
                "watch", "XBTUSD",
                "--reference-price", "100",
                "--iterations", "1",
            ]) == 0

        assert mock_price.call_count == 1
        assert capsys.readouterr().out == ""
