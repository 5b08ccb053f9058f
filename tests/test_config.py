import unittest

from topic_client.config import ClientConfig, parse_address
from topic_client.errors import ConfigurationError


class ParseAddressTests(unittest.TestCase):
    def test_host_and_port(self):
        self.assertEqual(parse_address("127.0.0.1:1337"), ("127.0.0.1", 1337))
        self.assertEqual(parse_address(" game.example.net:3000 "), ("game.example.net", 3000))

    def test_ipv6(self):
        self.assertEqual(parse_address("[::1]:1337"), ("::1", 1337))

    def test_invalid(self):
        for address in ("", "   ", "localhost", ":1337", "host:port", "::1:1337", "[::1]1337", "[]:1337"):
            with self.subTest(address=address):
                with self.assertRaises(ConfigurationError):
                    parse_address(address)


class ClientConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = ClientConfig(host="localhost", port=1337)
        self.assertEqual(config.timeout_ms, 5000)
        self.assertEqual(config.timeout, 5.0)
        self.assertEqual(config.status_errors, "ignore")
        self.assertEqual(config.address, "localhost:1337")

    def test_from_address(self):
        config = ClientConfig.from_address("[::1]:1337", 250, status_errors="raise")
        self.assertEqual(config.host, "::1")
        self.assertEqual(config.timeout, 0.25)
        self.assertEqual(config.address, "[::1]:1337")

    def test_zero_timeout_is_a_zero_deadline(self):
        self.assertEqual(ClientConfig(host="localhost", port=1337, timeout_ms=0).timeout, 0.0)

    def test_rejects_bad_values(self):
        bad = [
            {"port": 0},
            {"port": 65536},
            {"port": True},
            {"timeout_ms": -1},
            {"timeout_ms": 1.5},
            {"status_errors": "explode"},
            {"recv_size": 0},
            {"recv_size": "4096"},
            {"recv_size": None},
        ]
        for overrides in bad:
            with self.subTest(**overrides):
                with self.assertRaises(ConfigurationError):
                    ClientConfig(**{"host": "localhost", "port": 1337, **overrides})

    def test_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            ClientConfig(host="", port=1337)


if __name__ == "__main__":
    unittest.main()
