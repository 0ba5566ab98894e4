"""
Real HTTP integration clients.

These clients communicate with the storefront backend via httpx:
- catalog.py: product listing and search
- cart.py: authenticated cart fetch and add/update
- auth.py: registration and login

Important:
- Transport failures are caught here and re-raised as storefront errors
  (storefront/errors.py); nothing httpx-specific leaks to callers.
- Payloads are normalized through storefront/integrations/policy/response_wrappers.py

Switching:
Pass an httpx transport (e.g. ASGITransport over the mock backend) to run the
same clients without a network; see storefront/dependencies.py.
"""
