"""Utility for resolving account codes or names to account codes."""

from ledgerbook.domain.account import AccountService


def resolve_account(account_service: AccountService, account: str) -> str:
    """Resolve an account code or name to the account code.

    An exact code match wins; otherwise the name is matched
    case-insensitively.

    Raises:
        ValueError: If no account matches, or the name matches several accounts
    """
    account = str(account).strip()
    if account_service.get_account(account) is not None:
        return account

    wanted = account.lower()
    matches = [a for a in account_service.list_accounts() if a.name.lower() == wanted]
    if len(matches) == 1:
        return matches[0].code
    if len(matches) > 1:
        codes = ", ".join(a.code for a in matches)
        raise ValueError(f"Account name '{account}' is ambiguous (codes: {codes})")
    raise ValueError(f"Account '{account}' not found")
