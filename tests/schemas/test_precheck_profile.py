from __future__ import annotations

from jobprecheck.schemas import UNKNOWN, PrecheckProfile, ResolvedProfile, resolve_profile


def test_none_profile_resolves_to_unknown():
    assert resolve_profile(None) == ResolvedProfile(UNKNOWN, UNKNOWN, UNKNOWN)


def test_profile_accepts_camel_case_record():
    profile = PrecheckProfile.model_validate(
        {
            "workStatus": "temporary_resident",
            "needsSponsorship": "true",
            "countryOfResidence": "India",
            "regionCode": "CA",
            "trackCode": "COOP",
            "school": "University of Waterloo",
        }
    )

    assert profile.region_code == "CA"
    assert profile.track_code == "COOP"
    assert profile.resolve() == ResolvedProfile(
        work_status="temporary_resident",
        needs_sponsorship="true",
        country_of_residence="India",
    )


def test_missing_fields_degrade_independently():
    profile = PrecheckProfile(work_status="citizen_pr", country_of_residence="  ")

    resolved = profile.resolve()

    assert resolved.work_status == "citizen_pr"
    assert resolved.needs_sponsorship == UNKNOWN
    assert resolved.country_of_residence == UNKNOWN


def test_boolean_sponsorship_is_coerced():
    assert PrecheckProfile(needs_sponsorship=True).needs_sponsorship == "true"
    assert resolve_profile({"needs_sponsorship": False}).needs_sponsorship == "false"


def test_mapping_with_unexpected_values_does_not_raise():
    resolved = resolve_profile({"workStatus": None, "needsSponsorship": 3, "countryOfResidence": ["Canada"]})

    assert resolved == ResolvedProfile()


def test_record_without_profile_attributes_resolves_to_unknown():
    assert resolve_profile(object()) == ResolvedProfile()  # type: ignore[arg-type]
