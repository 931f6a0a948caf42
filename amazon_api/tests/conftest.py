"""
Shared fixtures for the Product Advertising API tests.

Response fixtures are trimmed copies of real 2013-08-01 responses, keeping the
default namespace so the decoder's namespace handling is exercised.
"""
from datetime import datetime, timezone

import pytest

from amazon_api.config import APIConfig

NS = "http://webservices.amazon.com/AWSECommerceService/2013-08-01"

FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


ITEM_SEARCH_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<ItemSearchResponse xmlns="{NS}">
  <OperationRequest>
    <RequestId>3f2a1b4c-0000-4bbb-9ccc-1234567890ab</RequestId>
    <Arguments>
      <Argument Name="Operation" Value="ItemSearch"/>
      <Argument Name="Keywords" Value="algorithms"/>
      <Argument Name="SearchIndex" Value="Books"/>
    </Arguments>
    <RequestProcessingTime>0.0421</RequestProcessingTime>
  </OperationRequest>
  <Items>
    <Request>
      <IsValid>True</IsValid>
      <ItemSearchRequest>
        <ItemPage>1</ItemPage>
        <Keywords>algorithms</Keywords>
        <ResponseGroup>Images</ResponseGroup>
        <ResponseGroup>ItemAttributes</ResponseGroup>
        <SearchIndex>Books</SearchIndex>
      </ItemSearchRequest>
    </Request>
    <TotalResults>2</TotalResults>
    <TotalPages>1</TotalPages>
    <MoreSearchResultsUrl>https://www.amazon.com/gp/search?keywords=algorithms</MoreSearchResultsUrl>
    <Item>
      <ASIN>0262033844</ASIN>
      <DetailPageURL>https://www.amazon.com/dp/0262033844</DetailPageURL>
      <SalesRank>1523</SalesRank>
      <LargeImage>
        <URL>https://images.example.com/I/41T0iBxY8FL.jpg</URL>
        <Height Units="pixels">500</Height>
        <Width Units="pixels">434</Width>
      </LargeImage>
      <ImageSets>
        <ImageSet Category="primary">
          <SmallImage>
            <URL>https://images.example.com/I/41T0iBxY8FL._SL75_.jpg</URL>
            <Height Units="pixels">75</Height>
            <Width Units="pixels">65</Width>
          </SmallImage>
        </ImageSet>
      </ImageSets>
      <ItemAttributes>
        <Author>Thomas H. Cormen</Author>
        <Author>Charles E. Leiserson</Author>
        <Binding>Hardcover</Binding>
        <EAN>9780262033848</EAN>
        <ISBN>0262033844</ISBN>
        <ListPrice>
          <Amount>9500</Amount>
          <CurrencyCode>USD</CurrencyCode>
          <FormattedPrice>$95.00</FormattedPrice>
        </ListPrice>
        <NumberOfPages>1312</NumberOfPages>
        <ProductGroup>Book</ProductGroup>
        <Publisher>The MIT Press</Publisher>
        <Title>Introduction to Algorithms, 3rd Edition</Title>
      </ItemAttributes>
      <EditorialReviews>
        <EditorialReview>
          <Source>Product Description</Source>
          <Content>Some books on algorithms are rigorous but incomplete.</Content>
          <IsLinkSuppressed>0</IsLinkSuppressed>
        </EditorialReview>
      </EditorialReviews>
    </Item>
    <Item>
      <ASIN>032157351X</ASIN>
      <DetailPageURL>https://www.amazon.com/dp/032157351X</DetailPageURL>
      <ItemAttributes>
        <Author>Robert Sedgewick</Author>
        <EAN>9780321573513</EAN>
        <Title>Algorithms (4th Edition)</Title>
      </ItemAttributes>
    </Item>
  </Items>
</ItemSearchResponse>
"""


INVALID_SEARCH_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<ItemSearchResponse xmlns="{NS}">
  <OperationRequest>
    <RequestId>11111111-2222-3333-4444-555555555555</RequestId>
    <Arguments>
      <Argument Name="Operation" Value="ItemSearch"/>
      <Argument Name="Keywords" Value=""/>
    </Arguments>
    <RequestProcessingTime>0.0012</RequestProcessingTime>
  </OperationRequest>
  <Items>
    <Request>
      <IsValid>False</IsValid>
      <ItemSearchRequest>
        <Keywords></Keywords>
        <SearchIndex>Books</SearchIndex>
      </ItemSearchRequest>
      <Errors>
        <Error>
          <Code>AWS.MissingParameters</Code>
          <Message>Your request is missing required parameters. Required parameters include Keywords.</Message>
        </Error>
      </Errors>
    </Request>
  </Items>
</ItemSearchResponse>
"""


NO_MATCH_SEARCH_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<ItemSearchResponse xmlns="{NS}">
  <Items>
    <Request>
      <IsValid>True</IsValid>
      <Errors>
        <Error>
          <Code>AWS.ECommerceService.NoExactMatches</Code>
          <Message>We did not find any matches for your request.</Message>
        </Error>
      </Errors>
    </Request>
    <TotalResults>0</TotalResults>
    <TotalPages>0</TotalPages>
  </Items>
</ItemSearchResponse>
"""


SIGNATURE_ERROR_XML = f"""<?xml version="1.0"?>
<ItemSearchErrorResponse xmlns="{NS}">
  <Error>
    <Code>SignatureDoesNotMatch</Code>
    <Message>The request signature we calculated does not match the signature you provided.</Message>
  </Error>
  <RequestId>aaaaaaaa-bbbb-cccc-dddd-eeeeeeeeeeee</RequestId>
</ItemSearchErrorResponse>
"""


PARAMETER_ERROR_XML = f"""<?xml version="1.0"?>
<ItemSearchErrorResponse xmlns="{NS}">
  <Error>
    <Code>AWS.InvalidParameterValue</Code>
    <Message>abc is not a valid value for ItemPage.</Message>
  </Error>
  <RequestId>aaaaaaaa-bbbb-cccc-dddd-ffffffffffff</RequestId>
</ItemSearchErrorResponse>
"""


ITEM_LOOKUP_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<ItemLookupResponse xmlns="{NS}">
  <OperationRequest>
    <RequestId>22222222-0000-0000-0000-000000000000</RequestId>
    <Arguments>
      <Argument Name="Operation" Value="ItemLookup"/>
      <Argument Name="ItemId" Value="0679722769"/>
    </Arguments>
    <RequestProcessingTime>0.0105</RequestProcessingTime>
  </OperationRequest>
  <Items>
    <Request>
      <IsValid>True</IsValid>
      <ItemLookupRequest>
        <IdType>ASIN</IdType>
        <ItemId>0679722769</ItemId>
        <ResponseGroup>Offers</ResponseGroup>
        <VariationPage>All</VariationPage>
      </ItemLookupRequest>
    </Request>
    <Item>
      <ASIN>0679722769</ASIN>
      <DetailPageURL>https://www.amazon.com/dp/0679722769</DetailPageURL>
      <OfferSummary>
        <LowestNewPrice>
          <Amount>1150</Amount>
          <CurrencyCode>USD</CurrencyCode>
          <FormattedPrice>$11.50</FormattedPrice>
        </LowestNewPrice>
        <LowestUsedPrice>
          <Amount>399</Amount>
          <CurrencyCode>USD</CurrencyCode>
          <FormattedPrice>$3.99</FormattedPrice>
        </LowestUsedPrice>
        <TotalNew>37</TotalNew>
        <TotalUsed>112</TotalUsed>
        <TotalCollectible>2</TotalCollectible>
        <TotalRefurbished>0</TotalRefurbished>
      </OfferSummary>
      <Offers>
        <TotalOffers>1</TotalOffers>
        <TotalOfferPages>1</TotalOfferPages>
        <MoreOffersUrl>https://www.amazon.com/gp/offer-listing/0679722769</MoreOffersUrl>
        <Offer>
          <OfferAttributes>
            <Condition>New</Condition>
          </OfferAttributes>
          <OfferListing>
            <OfferListingId>abc123listing</OfferListingId>
            <Price>
              <Amount>1295</Amount>
              <CurrencyCode>USD</CurrencyCode>
              <FormattedPrice>$12.95</FormattedPrice>
            </Price>
            <AmountSaved>
              <Amount>305</Amount>
              <CurrencyCode>USD</CurrencyCode>
              <FormattedPrice>$3.05</FormattedPrice>
            </AmountSaved>
            <PercentageSaved>19</PercentageSaved>
            <Availability>Usually ships in 24 hours</Availability>
            <IsEligibleForPrime>1</IsEligibleForPrime>
          </OfferListing>
        </Offer>
      </Offers>
      <BrowseNodes>
        <BrowseNode>
          <BrowseNodeId>10134</BrowseNodeId>
          <Name>Classics</Name>
          <Ancestors>
            <BrowseNode>
              <BrowseNodeId>17</BrowseNodeId>
              <Name>Literature &amp; Fiction</Name>
              <Ancestors>
                <BrowseNode>
                  <BrowseNodeId>1000</BrowseNodeId>
                  <Name>Subjects</Name>
                  <IsCategoryRoot>1</IsCategoryRoot>
                </BrowseNode>
              </Ancestors>
            </BrowseNode>
          </Ancestors>
        </BrowseNode>
      </BrowseNodes>
    </Item>
  </Items>
</ItemLookupResponse>
"""


BROWSE_NODE_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<BrowseNodeLookupResponse xmlns="{NS}">
  <OperationRequest>
    <RequestId>33333333-0000-0000-0000-000000000000</RequestId>
    <RequestProcessingTime>0.0033</RequestProcessingTime>
  </OperationRequest>
  <BrowseNodes>
    <Request>
      <IsValid>True</IsValid>
      <BrowseNodeLookupRequest>
        <BrowseNodeId>3839</BrowseNodeId>
        <ResponseGroup>BrowseNodeInfo</ResponseGroup>
        <ResponseGroup>TopSellers</ResponseGroup>
      </BrowseNodeLookupRequest>
    </Request>
    <BrowseNode>
      <BrowseNodeId>3839</BrowseNodeId>
      <Name>Algorithms</Name>
      <Children>
        <BrowseNode>
          <BrowseNodeId>3970</BrowseNodeId>
          <Name>Data Structures</Name>
        </BrowseNode>
      </Children>
      <Ancestors>
        <BrowseNode>
          <BrowseNodeId>3508</BrowseNodeId>
          <Name>Programming</Name>
          <Ancestors>
            <BrowseNode>
              <BrowseNodeId>5</BrowseNodeId>
              <Name>Computers &amp; Technology</Name>
            </BrowseNode>
          </Ancestors>
        </BrowseNode>
      </Ancestors>
      <TopSellers>
        <TopSeller>
          <ASIN>0262033844</ASIN>
          <Title>Introduction to Algorithms, 3rd Edition</Title>
        </TopSeller>
        <TopSeller>
          <ASIN>032157351X</ASIN>
          <Title>Algorithms (4th Edition)</Title>
        </TopSeller>
      </TopSellers>
    </BrowseNode>
  </BrowseNodes>
</BrowseNodeLookupResponse>
"""


@pytest.fixture
def api_config():
    """Fixture credentials against the default US endpoint."""
    return APIConfig(
        access_key="AKIDEXAMPLE",
        secret_key="fixture-secret",
        associate_tag="bestbook-20",
    )


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_TIME."""
    return lambda: FIXED_TIME


@pytest.fixture
def amazon_env(monkeypatch):
    """Fixture credentials in the AMAZON_* environment variables."""
    monkeypatch.setenv("AMAZON_ACCESS_KEY", "AKIDEXAMPLE")
    monkeypatch.setenv("AMAZON_SECRET_KEY", "fixture-secret")
    monkeypatch.setenv("AMAZON_ASSOCIATE_TAG", "bestbook-20")
    monkeypatch.delenv("AMAZON_LOCALE", raising=False)
    monkeypatch.delenv("AMAZON_HOST", raising=False)
