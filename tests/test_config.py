import unittest

from awssigner import ConfigurationError, Service, SigningIdentity

ENV = {
    'AWS_ACCESS_KEY_ID': 'AKIDEXAMPLE',
    'AWS_SECRET_ACCESS_KEY': 'wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY',
    'AWS_DEFAULT_REGION': 'eu-west-1',
}


class TestSigningIdentity(unittest.TestCase):
    def test_service_enum_stored_as_name(self) -> None:
        identity = SigningIdentity('AKIDEXAMPLE', 'secret', 'us-east-1', Service.EXECUTE_API)
        self.assertEqual(identity.service, 'execute-api')
        self.assertEqual(identity, SigningIdentity('AKIDEXAMPLE', 'secret', 'us-east-1', 'execute-api'))

    def test_repr_hides_secret(self) -> None:
        identity = SigningIdentity('AKIDEXAMPLE', 'very-secret', 'us-east-1', 'iam')
        self.assertNotIn('very-secret', repr(identity))
        self.assertIn('AKIDEXAMPLE', repr(identity))

    def test_immutable(self) -> None:
        identity = SigningIdentity('AKIDEXAMPLE', 'secret', 'us-east-1', 'iam')
        with self.assertRaises(AttributeError):
            identity.region = 'eu-west-1'

    def test_from_env(self) -> None:
        identity = SigningIdentity.from_env(Service.S3, ENV)
        self.assertEqual(identity.access_key, 'AKIDEXAMPLE')
        self.assertEqual(identity.secret_key, 'wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY')
        self.assertEqual(identity.region, 'eu-west-1')
        self.assertEqual(identity.service, 's3')

    def test_from_env_region_preference(self) -> None:
        identity = SigningIdentity.from_env('iam', dict(ENV, AWS_REGION='us-west-2'))
        self.assertEqual(identity.region, 'us-west-2')

    def test_from_env_missing(self) -> None:
        for name in ('AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY', 'AWS_DEFAULT_REGION'):
            env = {k: v for k, v in ENV.items() if k != name}
            with self.subTest(name):
                with self.assertRaisesRegex(ConfigurationError, 'AWS_'):
                    SigningIdentity.from_env('iam', env)

    def test_from_env_blank_value(self) -> None:
        with self.assertRaisesRegex(ConfigurationError, 'AWS_SECRET_ACCESS_KEY'):
            SigningIdentity.from_env('iam', dict(ENV, AWS_SECRET_ACCESS_KEY='  '))


if __name__ == '__main__':
    unittest.main(verbosity=2)
