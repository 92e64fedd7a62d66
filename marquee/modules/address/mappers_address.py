from marquee.modules.address import models_address, schemas_address


def address_base_to_model(
    address: schemas_address.AddressBase,
) -> models_address.Address:
    return models_address.Address(
        street=address.street,
        number=address.number,
    )


def address_model_to_complete(
    address: models_address.Address,
) -> schemas_address.AddressComplete:
    return schemas_address.AddressComplete(
        id=address.id,
        street=address.street,
        number=address.number,
    )


def address_model_to_update(
    address: models_address.Address,
) -> schemas_address.AddressUpdate:
    return schemas_address.AddressUpdate(
        street=address.street,
        number=address.number,
    )


def apply_address_update(
    address: models_address.Address,
    address_update: schemas_address.AddressUpdate,
) -> None:
    """Overwrite every mutable field of `address`"""
    address.street = address_update.street
    address.number = address_update.number
